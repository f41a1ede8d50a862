"""
Inbound tradehook receiver.

Tradologics POSTs ``{"tradehook": "<kind>", "payload": {...}}`` to the
strategy's endpoint; the receiver hands both to the strategy callback.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from litestar import Litestar, MediaType, Response, post

from tradologics.core import serialization

logger = logging.getLogger(__name__)

Strategy = Callable[[str, bytes], Any]


@dataclass
class TradehookRequest:
    tradehook: str
    payload: Any = None


def create_app(strategy: Strategy, endpoint: str = "/") -> Litestar:
    """Build an app with a single POST-only route at ``endpoint``."""

    @post(endpoint, status_code=200, sync_to_thread=False)
    def receive_tradehook(data: TradehookRequest) -> Response[str]:
        logger.debug(f"Tradehook received: {data.tradehook}")
        strategy(data.tradehook, serialization.dumps(data.payload))
        return Response(content="OK", media_type=MediaType.TEXT, status_code=200)

    return Litestar(route_handlers=[receive_tradehook])


def start(strategy: Strategy, endpoint: str = "/", host: str = "0.0.0.0", port: int = 5000):
    """Serve the receiver until interrupted."""
    import uvicorn

    logger.info(f"Tradehook receiver listening on {host}:{port}{endpoint}")
    uvicorn.run(create_app(strategy, endpoint), host=host, port=port)
