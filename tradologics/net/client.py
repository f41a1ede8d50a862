"""
HTTP dispatcher for the Tradologics API.

Every call is routed one of three ways, in order:
1. Target has a scheme -> sent untouched with ``requests``
2. Backtest mode is on -> bridged to the backtest engine
3. Otherwise -> live API with bearer-token authentication

Routing state lives in an explicit ``ClientConfig`` so independent clients can
coexist. A lazily built default client backs the module-level helpers.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

import requests
from opentelemetry import trace

from tradologics.backtest.bridge import Backtest, Call
from tradologics.core import constants
from tradologics.core.config import Settings, get_settings
from tradologics.core.exceptions import MissingBacktestMode, MissingToken
from tradologics.core.models import BarInfo
from tradologics.net.utils import include_protocol, split_path, strip_trailing_slash

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

Body = Optional[Union[bytes, str]]


@dataclass
class ClientConfig:
    scheme: str = constants.API_SCHEME
    host: str = constants.API_HOST
    base_path: str = constants.API_BASE_PATH
    token: str = ""
    timeout: float = constants.HTTP_TIMEOUT
    socket_url: str = constants.BACKTEST_SOCKET_URL
    receive_timeout: Optional[int] = None
    send_timeout: Optional[int] = None
    backtest: Optional[Backtest] = None
    backtest_enabled: bool = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ClientConfig":
        settings = settings or get_settings()
        return cls(
            scheme=settings.TGX_API_SCHEME,
            host=settings.TGX_API_HOST,
            base_path=settings.TGX_API_BASE_PATH,
            token=settings.TGX_API_TOKEN,
            timeout=settings.HTTP_TIMEOUT,
            socket_url=settings.BACKTEST_SOCKET_URL,
            receive_timeout=settings.BACKTEST_RECEIVE_TIMEOUT_MS,
            send_timeout=settings.BACKTEST_SEND_TIMEOUT_MS,
        )

    @property
    def is_backtest(self) -> bool:
        return self.backtest is not None and self.backtest_enabled

    def api_url(self, path: str) -> str:
        return f"{self.scheme}://{self.host}{self.base_path}{strip_trailing_slash(path)}"


class Client:
    """
    Tradologics API client.

    Example:
        >>> client = Client(ClientConfig(token="..."))
        >>> res = client.get("/accounts")
        >>> res.json()["data"]
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()

    # ------------------------------------------------------------------
    # Mode switches
    # ------------------------------------------------------------------

    def set_token(self, token: str) -> None:
        self.config.token = token

    def set_backtest_mode(
        self, start: str, end: str, socket_url: Optional[str] = None
    ) -> Backtest:
        """Connect to the backtest engine and route API calls through it."""
        backtest = Backtest.connect(
            start,
            end,
            socket_url or self.config.socket_url,
            receive_timeout=self.config.receive_timeout,
            send_timeout=self.config.send_timeout,
        )
        if self.config.backtest is not None:
            self.config.backtest.close()
        self.config.backtest = backtest
        self.config.backtest_enabled = True
        return backtest

    def disable_backtest_mode(self) -> None:
        if self.config.backtest is not None:
            self.config.backtest.close()
        self.config.backtest = None
        self.config.backtest_enabled = False

    def set_current_bar_info(self, datetime: str, resolution: str) -> None:
        if self.config.backtest is None:
            raise MissingBacktestMode()
        self.config.backtest.set_current_bar_info(
            BarInfo(datetime=datetime, resolution=resolution)
        )

    def get_runtime_events(self) -> Dict[str, Any]:
        if self.config.backtest is None:
            raise MissingBacktestMode()
        return self.config.backtest.get_runtime_events()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        url: str,
        data: Body = None,
        headers: Optional[Mapping[str, str]] = None,
        content_type: str = "",
    ) -> requests.Response:
        headers = dict(headers or {})
        if content_type:
            headers["Content-Type"] = content_type

        if include_protocol(url):
            return requests.request(
                method, url, data=data, headers=headers, timeout=self.config.timeout
            )

        if self.config.is_backtest:
            return self.config.backtest.execute(
                Call(method=method, path=url, body=data, headers=headers)
            )

        return self._live_request(method, url, data, headers)

    @tracer.start_as_current_span("tradologics_live_request")
    def _live_request(
        self, method: str, path: str, data: Body, headers: Dict[str, str]
    ) -> requests.Response:
        if not any(k.lower() == "authorization" for k in headers):
            if not self.config.token:
                raise MissingToken()
            headers["Authorization"] = f"Bearer {self.config.token}"

        url = self.config.api_url(path)
        logger.debug(f"{method} {url}")
        try:
            return requests.request(
                method, url, data=data, headers=headers, timeout=self.config.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Tradologics API request {method} {url} failed: {e}")
            raise

    def do(self, req: requests.Request) -> requests.Response:
        """Send a prebuilt ``requests.Request`` through the dispatcher."""
        if include_protocol(req.url):
            with requests.Session() as session:
                return session.send(req.prepare(), timeout=self.config.timeout)
        return self.request(req.method, split_path(req.url), req.data, req.headers)

    def head(self, url: str) -> requests.Response:
        return self.request("HEAD", url)

    def get(self, url: str) -> requests.Response:
        return self.request("GET", url)

    def post(self, url: str, content_type: str, data: Body) -> requests.Response:
        return self.request("POST", url, data, content_type=content_type)

    def post_form(self, url: str, fields: Mapping[str, Any]) -> requests.Response:
        return self.post(url, constants.FORM_CONTENT_TYPE, urlencode(fields, doseq=True))

    def close(self) -> None:
        self.disable_backtest_mode()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


_default_client: Optional[Client] = None


def get_default_client() -> Client:
    global _default_client
    if _default_client is None:
        _default_client = Client(ClientConfig.from_settings())
    return _default_client


def set_default_client(client: Optional[Client]) -> None:
    global _default_client
    _default_client = client


def head(url: str) -> requests.Response:
    return get_default_client().head(url)


def get(url: str) -> requests.Response:
    return get_default_client().get(url)


def post(url: str, content_type: str, data: Body) -> requests.Response:
    return get_default_client().post(url, content_type, data)


def post_form(url: str, fields: Mapping[str, Any]) -> requests.Response:
    return get_default_client().post_form(url, fields)


def set_token(token: str) -> None:
    get_default_client().set_token(token)


def set_backtest_mode(start: str, end: str, socket_url: Optional[str] = None) -> Backtest:
    return get_default_client().set_backtest_mode(start, end, socket_url)


def set_current_bar_info(datetime: str, resolution: str) -> None:
    get_default_client().set_current_bar_info(datetime, resolution)


def get_runtime_events() -> Dict[str, Any]:
    return get_default_client().get_runtime_events()
