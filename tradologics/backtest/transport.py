"""ZeroMQ request/reply link to the backtest engine.

One REQ socket, one outstanding request. Every failure is raised to the caller
as a ``TransportError`` subclass; nothing is retried here.
"""

import logging
from typing import List, Optional, Type, TypeVar

import zmq
from pydantic import BaseModel, ValidationError

from tradologics.core import serialization
from tradologics.core.exceptions import (
    TransportConnectFailed,
    TransportDecodeFailed,
    TransportEncodeFailed,
    TransportReceiveFailed,
    TransportSendFailed,
    TransportTimeout,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ZmqLink:
    """
    Synchronous request/reply channel over a single ZeroMQ REQ socket.

    Attributes:
        address: Endpoint the socket is connected to (e.g. ``tcp://127.0.0.1:3003``)
        receive_timeout: Receive deadline in ms, ``None`` blocks forever
        send_timeout: Send deadline in ms, ``None`` blocks forever

    Example:
        >>> with ZmqLink.open("tcp://127.0.0.1:3003", receive_timeout=5000) as link:
        ...     link.send_json({"method": "GET", "url": "/accounts"})
        ...     reply = link.receive_json()
    """

    def __init__(
        self,
        address: str,
        receive_timeout: Optional[int] = None,
        send_timeout: Optional[int] = None,
        context: Optional[zmq.Context] = None,
    ):
        self.address = address
        self.receive_timeout = receive_timeout
        self.send_timeout = send_timeout
        self._context = context
        self._owns_context = context is None
        self._socket: Optional[zmq.Socket] = None

    @classmethod
    def open(
        cls,
        address: str,
        receive_timeout: Optional[int] = None,
        send_timeout: Optional[int] = None,
        context: Optional[zmq.Context] = None,
    ) -> "ZmqLink":
        """Create the socket and connect it now. Raises TransportConnectFailed."""
        link = cls(address, receive_timeout, send_timeout, context)
        link.connect()
        return link

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def connect(self) -> None:
        if self._socket is not None:
            return

        context = self._context or zmq.Context()
        socket = None
        try:
            socket = context.socket(zmq.REQ)
            # After a timed-out receive the next send stays legal, and a late
            # reply to the abandoned request is dropped instead of delivered.
            socket.setsockopt(zmq.REQ_RELAXED, 1)
            socket.setsockopt(zmq.REQ_CORRELATE, 1)
            socket.setsockopt(zmq.LINGER, 0)
            if self.receive_timeout is not None:
                socket.setsockopt(zmq.RCVTIMEO, int(self.receive_timeout))
            if self.send_timeout is not None:
                socket.setsockopt(zmq.SNDTIMEO, int(self.send_timeout))
            socket.connect(self.address)
        except zmq.ZMQError as e:
            if socket is not None:
                socket.close(linger=0)
            if self._owns_context:
                context.term()
            raise TransportConnectFailed(
                f"Cannot connect to backtest engine: {e}", self.address, e
            ) from e

        self._context = context
        self._socket = socket
        logger.debug(f"Backtest link connected to {self.address}")

    # ------------------------------------------------------------------
    # Send
    # ------------------------------------------------------------------

    def send_bytes(self, payload: bytes) -> None:
        if self._socket is None:
            raise TransportSendFailed("Backtest link is closed", self.address)
        try:
            self._socket.send(payload)
        except zmq.ZMQError as e:
            raise TransportSendFailed(
                f"Failed to send message: {e}", self.address, e
            ) from e

    def send_json(self, value) -> None:
        try:
            payload = serialization.dumps(value)
        except TypeError as e:
            raise TransportEncodeFailed(
                f"Failed to encode message: {e}", self.address, e
            ) from e
        self.send_bytes(payload)

    # ------------------------------------------------------------------
    # Receive
    # ------------------------------------------------------------------

    def receive_bytes(self) -> List[bytes]:
        """Block until one multi-part message arrives. Frames in arrival order."""
        if self._socket is None:
            raise TransportReceiveFailed("Backtest link is closed", self.address)
        try:
            return self._socket.recv_multipart()
        except zmq.Again as e:
            raise TransportTimeout(
                f"No reply within {self.receive_timeout} ms",
                self.address,
                self.receive_timeout,
            ) from e
        except zmq.ZMQError as e:
            raise TransportReceiveFailed(
                f"Failed to receive message: {e}", self.address, e
            ) from e

    def receive_json(self, model: Optional[Type[M]] = None):
        """
        Receive one message and decode its first frame.

        Later frames are ignored; only the first one carries the payload.
        When ``model`` is given the document is validated into it.
        """
        frames = self.receive_bytes()
        if not frames:
            raise TransportDecodeFailed("Received an empty message", self.address)

        try:
            value = serialization.loads(frames[0])
        except ValueError as e:
            raise TransportDecodeFailed(
                f"Reply is not valid JSON: {e}", self.address, e
            ) from e

        if model is None:
            return value
        try:
            return model.model_validate(value)
        except ValidationError as e:
            raise TransportDecodeFailed(
                f"Reply does not match {model.__name__}", self.address, e
            ) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the socket. Safe to call more than once."""
        if self._socket is not None:
            self._socket.close(linger=0)
            self._socket = None
            logger.debug(f"Backtest link to {self.address} closed")
        if self._owns_context and self._context is not None:
            self._context.term()
            self._context = None

    def __enter__(self) -> "ZmqLink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
