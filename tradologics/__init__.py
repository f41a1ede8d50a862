"""Tradologics Python SDK.

Call the Tradologics API live, or against the backtest engine once
``set_backtest_mode`` has been called.

Tracing is off until the host application installs an exporter:

    from tradologics.core.telemetry import setup_telemetry
    setup_telemetry("my-strategy")  # reads OTEL_EXPORTER_OTLP_ENDPOINT

After that, bridged backtest calls and live API calls are reported as spans
and SDK log records are shipped through OTLP.
"""

from tradologics.core.constants import VERSION
from tradologics.core.exceptions import (
    ConfigurationError,
    InvalidPayload,
    MissingBacktestMode,
    MissingToken,
    TradologicsError,
    TransportError,
)
from tradologics.core.models import BarInfo
from tradologics.net.client import (
    Client,
    ClientConfig,
    get,
    get_runtime_events,
    head,
    post,
    post_form,
    set_backtest_mode,
    set_current_bar_info,
    set_token,
)

__version__ = VERSION

__all__ = [
    "BarInfo",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "InvalidPayload",
    "MissingBacktestMode",
    "MissingToken",
    "TradologicsError",
    "TransportError",
    "get",
    "get_runtime_events",
    "head",
    "post",
    "post_form",
    "set_backtest_mode",
    "set_current_bar_info",
    "set_token",
]
