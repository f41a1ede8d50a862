"""Backtest bridge: ZeroMQ link, simulation context and call translation."""

from tradologics.backtest.bridge import Backtest, Call
from tradologics.backtest.context import SimulationContext
from tradologics.backtest.transport import ZmqLink

__all__ = ["Backtest", "Call", "SimulationContext", "ZmqLink"]
