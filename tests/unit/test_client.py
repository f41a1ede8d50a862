from unittest.mock import MagicMock, patch

import pytest
import requests

from tradologics.core.config import Settings
from tradologics.core.exceptions import MissingBacktestMode, MissingToken
from tradologics.net import client as client_module
from tradologics.net.client import Client, ClientConfig


@pytest.fixture
def mock_request():
    with patch("tradologics.net.client.requests.request") as request:
        request.return_value = MagicMock(status_code=200)
        yield request


@pytest.fixture
def backtest_client(backtest):
    return Client(ClientConfig(backtest=backtest, backtest_enabled=True))


def test_url_with_scheme_is_passthrough(mock_request):
    client = Client(ClientConfig(token="secret"))

    client.get("https://google.com")

    mock_request.assert_called_once_with(
        "GET", "https://google.com", data=None, headers={}, timeout=5.0
    )


def test_passthrough_wins_over_backtest(mock_request, backtest_client, link):
    backtest_client.post("https://example.com/hook", "application/json", b"{}")

    mock_request.assert_called_once()
    assert link.sent == []


def test_live_call_without_token_fails_before_network(mock_request):
    client = Client()

    with pytest.raises(MissingToken) as exc:
        client.get("/me")

    assert str(exc.value) == "please use `set_token(...)` first"
    mock_request.assert_not_called()


def test_live_call_adds_bearer_and_strips_trailing_slash(mock_request):
    client = Client(ClientConfig(token="secret"))

    client.get("/accounts/")

    mock_request.assert_called_once_with(
        "GET",
        "https://api.tradologics.com/v1/accounts",
        data=None,
        headers={"Authorization": "Bearer secret"},
        timeout=5.0,
    )


def test_live_call_keeps_explicit_authorization(mock_request):
    client = Client()

    client.request("GET", "/me", headers={"Authorization": "Bearer other"})

    _, kwargs = mock_request.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer other"}


def test_live_post_sets_content_type(mock_request):
    client = Client(ClientConfig(token="t"))

    client.post("/accounts", "application/json", b'{"test": true}')

    _, kwargs = mock_request.call_args
    assert kwargs["data"] == b'{"test": true}'
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_post_form_is_urlencoded(mock_request):
    client = Client(ClientConfig(token="t"))

    client.post_form("/monitors", {"asset": "AAPL", "strategies": ["a", "b"]})

    _, kwargs = mock_request.call_args
    assert kwargs["data"] == "asset=AAPL&strategies=a&strategies=b"
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_head(mock_request):
    Client(ClientConfig(token="t")).head("/me")

    assert mock_request.call_args[0][0] == "HEAD"


def test_live_request_errors_propagate(mock_request):
    mock_request.side_effect = requests.ConnectionError("down")

    with pytest.raises(requests.ConnectionError):
        Client(ClientConfig(token="t")).get("/me")


def test_backtest_mode_routes_to_bridge(mock_request, backtest_client, link):
    link.queue_reply({"status": 200, "errors": [], "data": [], "events": {}})

    res = backtest_client.get("/accounts")

    assert res.status_code == 200
    assert link.sent[0]["url"] == "/accounts"
    mock_request.assert_not_called()


def test_backtest_mode_needs_no_token(mock_request, backtest_client, link):
    link.queue_reply({"status": 201, "errors": [], "data": {}, "events": {}})

    res = backtest_client.post("/monitors", "application/json", b'{"asset": "AAPL"}')

    assert res.status_code == 201
    assert link.sent[0]["data"] == {"asset": "AAPL"}


def test_disabled_bridge_falls_back_to_live(mock_request, backtest, link):
    client = Client(ClientConfig(token="t", backtest=backtest, backtest_enabled=False))

    client.get("/accounts")

    mock_request.assert_called_once()
    assert link.sent == []


def test_bar_info_and_events_require_backtest():
    client = Client()

    with pytest.raises(MissingBacktestMode) as exc:
        client.set_current_bar_info("2020-07-01 21:00:00.000000", "1m")
    assert str(exc.value) == "please set backtest mode first"

    with pytest.raises(MissingBacktestMode):
        client.get_runtime_events()


def test_bar_info_and_events_with_backtest(backtest_client, context):
    backtest_client.set_current_bar_info("2020-07-01 21:00:00.000000", "1m")

    assert context.snapshot_header().resolution == "1m"
    assert backtest_client.get_runtime_events() == {}


def test_do_routes_relative_request(mock_request, backtest_client, link):
    link.queue_reply({"status": 200, "errors": [], "data": {"name": "x"}, "events": {}})
    req = requests.Request("GET", "/me?fields=name", data=b'{"test": true}')

    res = backtest_client.do(req)

    assert res.json()["data"] == {"name": "x"}
    assert link.sent[0]["url"] == "/me?fields=name"
    assert link.sent[0]["data"] == {"test": True}


def test_do_absolute_request_uses_session():
    client = Client(ClientConfig(token="t"))
    req = requests.Request("GET", "https://google.com/")

    with patch("tradologics.net.client.requests.Session") as session_cls:
        session = session_cls.return_value.__enter__.return_value
        client.do(req)

    session.send.assert_called_once()
    prepared = session.send.call_args[0][0]
    assert prepared.url == "https://google.com/"


def test_set_backtest_mode_replaces_previous_bridge():
    client = Client(ClientConfig(socket_url="tcp://127.0.0.1:3003", receive_timeout=100))
    first, second = MagicMock(), MagicMock()

    with patch("tradologics.net.client.Backtest.connect", side_effect=[first, second]) as connect:
        client.set_backtest_mode("2021-01-01", "2021-01-08")
        client.set_backtest_mode("2021-02-01", "2021-02-08", "tcp://127.0.0.1:4000")

    connect.assert_any_call(
        "2021-01-01", "2021-01-08", "tcp://127.0.0.1:3003", receive_timeout=100, send_timeout=None
    )
    first.close.assert_called_once()
    assert client.config.backtest is second
    assert client.config.is_backtest

    client.close()
    second.close.assert_called_once()
    assert not client.config.is_backtest


def test_config_from_settings():
    settings = Settings(
        TGX_API_TOKEN="abc",
        TGX_API_HOST="sandbox.local",
        TGX_API_BASE_PATH="v2/",
        BACKTEST_RECEIVE_TIMEOUT_MS="",
    )

    config = ClientConfig.from_settings(settings)

    assert config.token == "abc"
    assert config.api_url("/me/") == "https://sandbox.local/v2/me"
    assert config.receive_timeout is None


def test_module_level_helpers_use_default_client(mock_request):
    client_module.set_default_client(Client())
    try:
        client_module.set_token("tok")
        client_module.get("/me")
    finally:
        client_module.set_default_client(None)

    _, kwargs = mock_request.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
