import pytest

from tradologics.backtest.bridge import Backtest
from tradologics.backtest.context import SimulationContext
from tradologics.core import serialization
from tradologics.core.exceptions import TransportDecodeFailed


class FakeLink:
    """
    In-memory stand-in for ZmqLink.

    Records every envelope sent and answers with queued reply documents.
    Queue an exception instance to make the matching step raise it.
    """

    def __init__(self):
        self.sent = []
        self.replies = []
        self.send_error = None
        self.closed = 0

    def queue_reply(self, reply):
        self.replies.append(reply)

    def send_json(self, value):
        if self.send_error is not None:
            raise self.send_error
        # Round-trip through the wire codec like the real link does
        self.sent.append(serialization.loads(serialization.dumps(value)))

    def receive_json(self, model=None):
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if model is None:
            return reply
        try:
            return model.model_validate(reply)
        except ValueError as e:
            raise TransportDecodeFailed("bad reply", cause=e) from e

    def close(self):
        self.closed += 1


@pytest.fixture
def context():
    return SimulationContext("2020-07-01", "2020-07-01")


@pytest.fixture
def link():
    return FakeLink()


@pytest.fixture
def backtest(context, link):
    return Backtest(context, link)
