from unittest.mock import MagicMock

import orjson
import pytest
from litestar.testing import TestClient

from tradologics.server.webhook import create_app


@pytest.fixture
def strategy():
    return MagicMock()


def test_post_dispatches_to_strategy(strategy):
    app = create_app(strategy, "/tradehook")

    with TestClient(app=app) as client:
        res = client.post(
            "/tradehook",
            json={"tradehook": "bar", "payload": {"AAPL": {"c": 120.5}}},
        )

    assert res.status_code == 200
    assert res.text == "OK"
    tradehook, payload = strategy.call_args[0]
    assert tradehook == "bar"
    assert orjson.loads(payload) == {"AAPL": {"c": 120.5}}


def test_other_methods_not_allowed(strategy):
    app = create_app(strategy, "/tradehook")

    with TestClient(app=app) as client:
        res = client.get("/tradehook")

    assert res.status_code == 405
    strategy.assert_not_called()


def test_missing_tradehook_is_rejected(strategy):
    app = create_app(strategy, "/tradehook")

    with TestClient(app=app) as client:
        res = client.post("/tradehook", json={"payload": {}})

    assert res.status_code == 400
    strategy.assert_not_called()
