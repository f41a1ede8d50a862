"""Sandbox tradehooks for testing strategy callbacks."""

from typing import Any, Dict, Optional

from tradologics.sandbox.tradehook import Sandbox, Strategy

_sandbox = Sandbox.from_settings()


def set_token(token: str) -> None:
    _sandbox.set_token(token)


def set_sandbox_url(url: str) -> None:
    """Point the module-level helpers at another sandbox (dev/test)."""
    _sandbox.url = url.rstrip("/")


def tradehook(kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.tradehook(kind, strategy, args)


def bar(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.bar(strategy, args)


def monitor(kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.monitor(kind, strategy, args)


def monitor_expired(kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.monitor_expired(kind, strategy, args)


def position_monitor(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.position_monitor(strategy, args)


def position_monitor_expired(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.position_monitor_expired(strategy, args)


def price_monitor(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.price_monitor(strategy, args)


def price_monitor_expired(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.price_monitor_expired(strategy, args)


def error(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.error(strategy, args)


def order(kind: str, strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order(kind, strategy, args)


def order_received(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("received", strategy, args)


def order_pending(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("pending", strategy, args)


def order_submitted(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("submitted", strategy, args)


def order_sent(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("sent", strategy, args)


def order_accepted(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("accepted", strategy, args)


def order_partially_filled(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("partially_filled", strategy, args)


def order_filled(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("filled", strategy, args)


def order_canceled(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("canceled", strategy, args)


def order_expired(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("expired", strategy, args)


def order_pending_cancel(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("pending_cancel", strategy, args)


def order_rejected(strategy: Strategy, args: Optional[Dict[str, Any]] = None):
    return _sandbox.order("rejected", strategy, args)


__all__ = [
    "Sandbox",
    "Strategy",
    "set_token",
    "set_sandbox_url",
    "tradehook",
    "bar",
    "monitor",
    "monitor_expired",
    "position_monitor",
    "position_monitor_expired",
    "price_monitor",
    "price_monitor_expired",
    "error",
    "order",
    "order_received",
    "order_pending",
    "order_submitted",
    "order_sent",
    "order_accepted",
    "order_partially_filled",
    "order_filled",
    "order_canceled",
    "order_expired",
    "order_pending_cancel",
    "order_rejected",
]
