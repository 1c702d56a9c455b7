from __future__ import annotations

import operator
from typing import Callable, Iterable, Sequence, Tuple

Tier = Tuple[float, float]  # (threshold, points)
Compare = Callable[[float, float], bool]

at_least: Compare = operator.ge
above: Compare = operator.gt
below: Compare = operator.lt


def tier_points(value: float, tiers: Iterable[Tier], compare: Compare = at_least) -> float:
    """Return the points of the first tier whose threshold ``value`` satisfies.

    Tiers are checked in the order given, so callers list the strictest tier
    first. Only one tier ever applies; a value matching none scores 0.
    """
    for threshold, points in tiers:
        if compare(value, threshold):
            return points
    return 0


def band_points(
    value: float,
    bonus_tiers: Sequence[Tier],
    penalty_tiers: Sequence[Tier],
    bonus_compare: Compare,
    penalty_compare: Compare,
) -> float:
    """Two-sided band table: bonus tiers first, then penalty tiers, first match wins."""
    for threshold, points in bonus_tiers:
        if bonus_compare(value, threshold):
            return points
    for threshold, points in penalty_tiers:
        if penalty_compare(value, threshold):
            return points
    return 0


def gated(sample: float, minimum: float, value: Callable[[], float]) -> float:
    """Evaluate a rate-based score only once the sample size reaches ``minimum``."""
    if sample < minimum:
        return 0
    return value()
