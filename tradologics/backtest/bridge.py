"""
The Backtest Bridge.

Turns one HTTP-shaped API call into one request/reply exchange with the
backtest engine and hands the engine's reply back as a ``requests.Response``.

**Exchange**:
1. Decode the call body (must be a JSON object)
2. Wrap it with the simulation header (range + current bar)
3. Send over the ZeroMQ link, block for the reply
4. Record the reply's runtime events on the context
5. Re-encode ``{"errors", "data"}`` as the response body

Any failure along the way produces a 502 reply with a single
``internal_server_error`` record; ``execute`` never raises.
"""

import io
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional, Union

import requests
from opentelemetry import trace
from requests.structures import CaseInsensitiveDict

from tradologics.backtest.context import SimulationContext
from tradologics.backtest.transport import ZmqLink
from tradologics.core import constants, serialization
from tradologics.core.exceptions import (
    InvalidPayload,
    TransportError,
    TransportTimeout,
)
from tradologics.core.models import (
    BacktestResponse,
    BarInfo,
    CallEnvelope,
    ErrorRecord,
    ReplyEnvelope,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class Call:
    """Inbound API call. ``path`` never carries a scheme or host."""

    method: str
    path: str
    body: Optional[Union[bytes, str]] = None
    headers: Dict[str, str] = field(default_factory=dict)


def status_text(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def build_response(status: int, body: bytes, call: Call) -> requests.Response:
    res = requests.Response()
    res.status_code = status
    res.reason = status_text(status)
    res._content = body
    res._content_consumed = True
    res.raw = io.BytesIO(body)
    res.encoding = "utf-8"
    res.headers = CaseInsensitiveDict({"Content-Type": constants.JSON_CONTENT_TYPE})
    res.url = call.path
    return res


class Backtest:
    """
    Bridge between API calls and the backtest engine.

    Owns the transport link (closed exactly once by ``close``); the simulation
    context is created by the caller and shared by reference.
    """

    def __init__(self, context: SimulationContext, link: ZmqLink):
        self.context = context
        self.link = link
        self._closed = False

    @classmethod
    def connect(
        cls,
        start: str,
        end: str,
        socket_url: str = constants.BACKTEST_SOCKET_URL,
        receive_timeout: Optional[int] = None,
        send_timeout: Optional[int] = None,
    ) -> "Backtest":
        """Open the engine link and build a fresh context for ``start``..``end``."""
        link = ZmqLink.open(socket_url, receive_timeout, send_timeout)
        logger.info(f"Backtest mode on ({start} -> {end}) via {socket_url}")
        return cls(SimulationContext(start, end), link)

    @tracer.start_as_current_span("backtest_execute")
    def execute(self, call: Call) -> requests.Response:
        try:
            data = self._decode_body(call.body)
        except InvalidPayload as e:
            return self._error_response(call, e, constants.INVALID_JSON_MESSAGE)

        envelope = CallEnvelope(
            method=call.method,
            url=call.path,
            data=data,
            headers=self.context.snapshot_header(),
        )

        try:
            self.link.send_json(envelope)
        except TransportError as e:
            return self._error_response(call, e)

        try:
            reply = self.link.receive_json(ReplyEnvelope)
        except TransportTimeout as e:
            return self._error_response(call, e, constants.TIMEOUT_ERROR_MESSAGE)
        except TransportError as e:
            return self._error_response(call, e)

        self.context.record_events(reply.events)

        try:
            body = serialization.dumps(
                BacktestResponse(errors=reply.errors, data=reply.data)
            )
        except TypeError as e:
            return self._error_response(call, e)

        return build_response(reply.status, body, call)

    def _decode_body(self, body: Optional[Union[bytes, str]]) -> Dict[str, Any]:
        if not body:
            return {}
        try:
            return serialization.loads_object(body)
        except (ValueError, TypeError) as e:
            raise InvalidPayload(f"Request body is not a JSON object: {e}") from e

    def _error_response(
        self,
        call: Call,
        err: Exception,
        message: str = constants.DEFAULT_ERROR_MESSAGE,
    ) -> requests.Response:
        logger.error(f"Backtest call {call.method} {call.path} failed: {err}")

        body = serialization.dumps(
            BacktestResponse(
                errors=[ErrorRecord(id=constants.ESCALATION_ERROR_ID, message=message)],
                data={},
            )
        )
        return build_response(constants.ESCALATION_STATUS, body, call)

    def set_current_bar_info(self, info: BarInfo) -> None:
        self.context.set_current_bar_info(info)

    def get_runtime_events(self) -> Dict[str, Any]:
        return self.context.read_events()

    def close(self) -> None:
        if self._closed:
            return
        self.link.close()
        self._closed = True

    def __enter__(self) -> "Backtest":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
