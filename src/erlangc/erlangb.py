"""Erlang B blocking probability and the monotone searches built around it."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .validation import ParameterKind, validate

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 0.001
MAX_SERVERS = 1 << 20


def blocking_probability(traffic: float, servers: int) -> Optional[float]:
    """
    Erlang B probability that a request finds all ``servers`` busy.

    Returns ``None`` when the inputs are outside their domain.
    """
    checked = validate(
        traffic=(ParameterKind.TRAFFIC, traffic),
        servers=(ParameterKind.SERVERS, servers),
    )
    if not checked:
        logger.debug("blocking_probability rejected: %s", checked.message)
        return None

    if servers == 0:
        return 1.0
    if traffic == 0:
        return 0.0

    b = 1.0
    for k in range(1, int(servers) + 1):
        b = (traffic * b) / (k + traffic * b)
    return b


def generic_servers(
    predicate: Callable[[int], bool], limit: int = MAX_SERVERS
) -> Optional[int]:
    """
    Return the minimal ``servers >= 0`` for which ``predicate`` is false.

    ``predicate`` must be true up to some server count and false from there on.
    The upper bound is doubled until the predicate fails, then refined by
    binary search. ``None`` means the boundary lies beyond ``limit``.
    """
    if not predicate(0):
        return 0

    low, high = 0, 1
    while predicate(high):
        low = high
        high *= 2
        if high > limit:
            logger.warning("server search exceeded limit of %d", limit)
            return None

    while high - low > 1:
        middle = (low + high) // 2
        if predicate(middle):
            low = middle
        else:
            high = middle
    logger.debug("server search converged at %d", high)
    return high


def generic_traffic(
    predicate: Callable[[float], bool], precision: float, upper_bound: float
) -> float:
    """
    Return the largest traffic in ``[0, upper_bound]`` satisfying ``predicate``.

    ``predicate`` must be true for low traffic and false from some point on;
    the boundary is resolved by bisection to within ``precision``.
    """
    low, high = 0.0, float(upper_bound)
    if predicate(high):
        return high

    steps = 0
    while high - low >= precision:
        middle = (low + high) / 2
        if middle in (low, high):
            break
        if predicate(middle):
            low = middle
        else:
            high = middle
        steps += 1
    logger.debug("traffic search converged at %.9g after %d steps", low, steps)
    return low
