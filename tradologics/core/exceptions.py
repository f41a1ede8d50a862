"""
Custom exceptions for the Tradologics SDK.

Transport errors are raised by the ZeroMQ link and converted into escalation
replies by the backtest bridge. Configuration errors are raised straight to the
call site.
"""


class TradologicsError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidPayload(TradologicsError):
    """Inbound call body is not a JSON object."""


# ============================================================================
# TRANSPORT
# ============================================================================


class TransportError(TradologicsError):
    """Exception raised by the backtest transport link."""

    def __init__(self, message: str, address: str = None, cause: Exception = None):
        details = {}
        if address:
            details["address"] = address
        if cause is not None:
            details["cause"] = repr(cause)
        super().__init__(message, details)
        self.cause = cause


class TransportConnectFailed(TransportError):
    pass


class TransportSendFailed(TransportError):
    pass


class TransportEncodeFailed(TransportError):
    pass


class TransportReceiveFailed(TransportError):
    pass


class TransportDecodeFailed(TransportError):
    pass


class TransportTimeout(TransportReceiveFailed):
    """No reply arrived before the receive deadline."""

    def __init__(self, message: str, address: str = None, timeout_ms: int = None):
        super().__init__(message, address)
        if timeout_ms is not None:
            self.details["timeout_ms"] = timeout_ms


# ============================================================================
# CONFIGURATION
# ============================================================================


class ConfigurationError(TradologicsError):
    """Exception raised for client configuration errors."""


class MissingToken(ConfigurationError):
    def __init__(self, message: str = "please use `set_token(...)` first"):
        super().__init__(message)


class MissingBacktestMode(ConfigurationError):
    def __init__(self, message: str = "please set backtest mode first"):
        super().__init__(message)
