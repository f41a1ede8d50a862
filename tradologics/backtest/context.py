import copy
import threading
from typing import Any, Dict, Optional

from tradologics.core.models import BarInfo, RequestHeader


class SimulationContext:
    """
    Call-independent backtest state attached to every bridged call.

    The date range is fixed at construction. The current bar is swapped as one
    immutable ``BarInfo`` so a header never pairs a new timestamp with a stale
    resolution. Runtime events hold the reply of the last successful exchange.
    """

    def __init__(self, start: str, end: str):
        self._start = start
        self._end = end
        self._bar = BarInfo()
        self._runtime_events: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def start(self) -> str:
        return self._start

    @property
    def end(self) -> str:
        return self._end

    @property
    def current_bar(self) -> BarInfo:
        return self._bar

    def set_current_bar(self, datetime: str, resolution: str) -> None:
        bar = BarInfo(datetime=datetime, resolution=resolution)
        with self._lock:
            self._bar = bar

    def set_current_bar_info(self, info: BarInfo) -> None:
        with self._lock:
            self._bar = info

    def snapshot_header(self) -> RequestHeader:
        with self._lock:
            bar = self._bar
        return RequestHeader(
            start=self._start,
            end=self._end,
            datetime=bar.datetime,
            resolution=bar.resolution,
        )

    def record_events(self, events: Optional[Dict[str, Any]]) -> None:
        snapshot = copy.deepcopy(events) if events else {}
        with self._lock:
            self._runtime_events = snapshot

    def read_events(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._runtime_events)
