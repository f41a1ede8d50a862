"""
Sandbox tradehook notifier.

Asks the Tradologics sandbox to emit a sample tradehook payload (bar, order
event, monitor hit, ...) and feeds the raw body to a strategy callback. Useful
for exercising strategy code without a live feed.
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from tradologics.core import constants
from tradologics.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

Strategy = Callable[[str, bytes], Any]


def encode_args(args: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Keep only str/int/bool query args. Bools go out as ``true``/``false``."""
    params = {}
    for key, value in (args or {}).items():
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (int, str)):
            params[key] = str(value)
    return params


class Sandbox:
    def __init__(
        self,
        url: str = constants.SANDBOX_URL,
        token: str = "",
        timeout: float = constants.HTTP_TIMEOUT,
    ):
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Sandbox":
        settings = settings or get_settings()
        return cls(
            url=settings.SANDBOX_URL,
            token=settings.TGX_API_TOKEN,
            timeout=settings.HTTP_TIMEOUT,
        )

    def set_token(self, token: str) -> None:
        self.token = token

    def tradehook(
        self, kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Fetch a sample ``kind`` tradehook and pass it to ``strategy``.

        ``order_filled`` is requested as ``{url}/order/filled`` and delivered to
        the strategy as tradehook ``order``.
        """
        url = f"{self.url}/{kind.replace('_', '/')}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "TGX-CLIENT": constants.CLIENT_NAME,
        }

        response = requests.get(
            url, headers=headers, params=encode_args(args), timeout=self.timeout
        )
        logger.debug(f"Sandbox {kind} -> {response.status_code}")

        return strategy(kind.split("_")[0], response.content)

    def bar(self, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook("bar", strategy, args)

    def monitor(self, kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook(kind, strategy, args)

    def monitor_expired(
        self, kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None
    ):
        return self.tradehook(f"{kind}_expire", strategy, args)

    def position_monitor(self, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook("position", strategy, args)

    def position_monitor_expired(
        self, strategy: Strategy, args: Optional[Dict[str, Any]] = None
    ):
        return self.tradehook("position_expire", strategy, args)

    def price_monitor(self, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook("price", strategy, args)

    def price_monitor_expired(
        self, strategy: Strategy, args: Optional[Dict[str, Any]] = None
    ):
        return self.tradehook("price_expire", strategy, args)

    def error(self, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook("error", strategy, args)

    def order(self, kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
        return self.tradehook(f"order_{kind}", strategy, args)
