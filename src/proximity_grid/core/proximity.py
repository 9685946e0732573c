"""Nearest-amount queries over a sorted amount array.

Pure functions with no knowledge of grids or UI state, so the query can be
exercised directly from arrays and dicts.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import numpy as np

from .validation import ProximityIndexError

logger = logging.getLogger(__name__)


def closest_index(sorted_amounts: Sequence[int] | np.ndarray, target: float) -> int:
    """Index of the value in ``sorted_amounts`` closest to ``target``.

    Lower-bound binary search, clamped to the last index. The predecessor
    wins only when it is strictly closer, so equal distances resolve
    upward. ``sorted_amounts`` must be non-empty and ascending.
    """
    arr = np.asarray(sorted_amounts)
    left = int(np.searchsorted(arr, target, side="left"))
    left = min(left, len(arr) - 1)
    if left > 0 and abs(arr[left - 1] - target) < abs(arr[left] - target):
        return left - 1
    return left


def _group(ids_by_amount: Mapping[int, Sequence[int]], value: int) -> Sequence[int]:
    try:
        return ids_by_amount[value]
    except KeyError:
        raise ProximityIndexError(
            f"Amount {value} is in the sorted amounts but has no cell ids."
        ) from None


def closest_cells(
    sorted_amounts: Sequence[int] | np.ndarray,
    ids_by_amount: Mapping[int, Sequence[int]],
    amount: float,
    count: int,
) -> frozenset[int]:
    """Return ids of at least ``count`` cells whose amounts are nearest ``amount``.

    The seed is the sorted position closest to ``amount``; its whole
    tie-group is taken first. Cursors then walk outward from the seed one
    position at a time, consuming whichever neighbour is nearer to the seed
    value (the higher side on a tie). Each consumed value contributes all
    cell ids holding it, so the result can exceed ``count`` when tie-groups
    are large. Returns the empty set for ``count <= 0`` or an empty index,
    and every id once the cursors run off both ends.
    """
    n = len(sorted_amounts)
    if count <= 0 or n == 0:
        return frozenset()

    arr = np.asarray(sorted_amounts)
    idx = closest_index(arr, amount)
    seed_value = int(arr[idx])

    result: set[int] = set(_group(ids_by_amount, seed_value))
    start = idx - 1
    end = idx + 1
    while len(result) < count and (start >= 0 or end < n):
        if start < 0:
            value = int(arr[end])
            end += 1
        elif end >= n:
            value = int(arr[start])
            start -= 1
        elif arr[end] - seed_value <= seed_value - arr[start]:
            value = int(arr[end])
            end += 1
        else:
            value = int(arr[start])
            start -= 1
        result.update(_group(ids_by_amount, value))

    logger.debug(
        "closest_cells(amount=%s, count=%d) -> %d ids around seed %d",
        amount, count, len(result), seed_value,
    )
    return frozenset(result)
