"""
analytics/scaling.py

Log-axis heuristics and value normalization for chart inputs.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from app.config import AnalyticsSettings

DEFAULT_LOG_BASE = 10.0
# Stand-in for zero/negative values on a log axis.
DEFAULT_MIN_POSITIVE = 0.01


class NormalizationType:
    MINMAX = "minmax"
    ZSCORE = "zscore"
    LOG = "log"


SUPPORTED_NORMALIZATIONS = (NormalizationType.MINMAX, NormalizationType.ZSCORE, NormalizationType.LOG)


def to_log_scale(value: float, *, base: float = DEFAULT_LOG_BASE, min_positive: float = DEFAULT_MIN_POSITIVE) -> float:
    if value <= 0:
        return math.log(min_positive) / math.log(base)
    return math.log(value) / math.log(base)


def from_log_scale(log_value: float, *, base: float = DEFAULT_LOG_BASE) -> float:
    return base ** log_value


def should_use_log_scale(
    values: Sequence[float],
    multiplier: float | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> bool:
    """
    Recommend a log axis when the positive values span more than *multiplier*.

    Fewer than two positive values never warrant one.
    """

    if multiplier is None:
        multiplier = (settings or AnalyticsSettings()).log_scale_multiplier
    positives = [value for value in values if value > 0]
    if len(positives) < 2:
        return False
    return max(positives) / min(positives) > multiplier


def normalize(values: Sequence[float], method: str = NormalizationType.MINMAX) -> list[float]:
    """
    Rescale *values* for side-by-side plotting.

    ``minmax`` maps to [0, 1] (a constant series maps to 0.5), ``zscore``
    uses the population standard deviation (a constant series maps to 0),
    and ``log`` is min-max over log10 of the absolute values.
    """

    if method not in SUPPORTED_NORMALIZATIONS:
        raise ValueError(f"Unsupported normalization {method!r}; expected one of {SUPPORTED_NORMALIZATIONS}.")
    if not values:
        return []

    array = np.asarray(values, dtype=float)
    if method == NormalizationType.LOG:
        array = np.asarray([to_log_scale(abs(value)) for value in values], dtype=float)
        method = NormalizationType.MINMAX

    if method == NormalizationType.MINMAX:
        span = float(array.max() - array.min())
        if span == 0.0:
            return [0.5] * len(values)
        return ((array - array.min()) / span).tolist()

    std = float(array.std())
    if std == 0.0:
        return [0.0] * len(values)
    return ((array - array.mean()) / std).tolist()
