"""Bar payload helpers for strategy code."""

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_bars(bars: Dict[str, Dict[str, Dict[str, Any]]]) -> Dict[str, Dict[str, List[float]]]:
    """
    Pivot a bar tradehook payload into per-asset columns.

    Input is keyed by timestamp, then asset, then field:
        {"2021-01-04T00:00:00": {"AAPL": {"o": 1.0, "c": 2.0}}}

    Output is keyed by asset, then column, with ``dt`` holding epoch
    milliseconds (timestamps read as UTC) in ascending order:
        {"AAPL": {"dt": [1609718400000.0], "o": [1.0], "c": [2.0]}}

    Non-numeric values become 0.0.
    """
    rows: Dict[str, List[tuple]] = {}
    for stamp, assets in bars.items():
        ts = pd.Timestamp(stamp)
        if ts.tzinfo is not None:
            ts = ts.tz_convert("UTC").tz_localize(None)
        epoch_ms = float(ts.value // 1_000_000)

        for asset, fields in assets.items():
            values = {k: _to_float(v) for k, v in fields.items()}
            rows.setdefault(asset, []).append((epoch_ms, values))

    data: Dict[str, Dict[str, List[float]]] = {}
    for asset, series in rows.items():
        series.sort(key=lambda row: row[0])
        columns: Dict[str, List[float]] = {"dt": []}
        for epoch_ms, values in series:
            columns["dt"].append(epoch_ms)
            for k, v in values.items():
                columns.setdefault(k, []).append(v)
        data[asset] = columns

    return data


def median(values: Sequence[float]) -> float:
    return float(np.median(np.asarray(values, dtype=float)))


def mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))
