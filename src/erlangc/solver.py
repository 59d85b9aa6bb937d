"""Bisection search for the crossing point of two monotone curves."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


def cross(
    asc: Callable[[float], float],
    desc: Callable[[float], float],
    v_begin: float,
    v_end: float,
    precision: float,
) -> float:
    """
    Locate ``v`` in ``[v_begin, v_end]`` where ``asc(v)`` meets ``desc(v)``.

    ``asc`` must be non-decreasing and ``desc`` non-increasing over the
    interval, so ``desc - asc`` changes sign at most once. The bracket is
    halved until it is narrower than ``precision`` and its midpoint returned.
    """
    if v_end - v_begin < precision:
        return (v_begin + v_end) / 2

    steps = 0
    while v_end - v_begin >= precision:
        v = (v_begin + v_end) / 2
        if v in (v_begin, v_end):
            break
        if desc(v) - asc(v) > 0:
            v_begin = v
        else:
            v_end = v
        steps += 1

    logger.debug("cross converged in %d steps to [%.9g, %.9g]", steps, v_begin, v_end)
    return (v_begin + v_end) / 2
