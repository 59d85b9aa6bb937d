"""Closed-form Erlang C metrics for an M/M/S queue with unlimited waiting room."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .erlangb import blocking_probability
from .validation import ParameterKind, validate

logger = logging.getLogger(__name__)


def wait_probability(traffic: float, servers: int) -> Optional[float]:
    """
    Probability that a request has to queue before being served (Erlang C).

    Derived from the Erlang B blocking probability. The stability condition
    ``servers > traffic`` is not required here: an unstable queue makes every
    request wait, so the result saturates at 1.
    """
    bprob = blocking_probability(traffic, servers)
    if bprob is None:
        return None
    if bprob == 0 or bprob == 1:
        return bprob
    if traffic >= servers:
        return 1.0

    return bprob / (1 - (1 - bprob) * traffic / servers)


def maxtime_probability(
    traffic: float, servers: int, mst: float, maxtime: float
) -> Optional[float]:
    """
    Probability that a request starts being served within ``maxtime``.

    Args:
        traffic: offered load in Erlangs.
        servers: number of agents.
        mst: mean service time.
        maxtime: deadline, in the same unit as ``mst``.

    Returns:
        The probability, or ``None`` when the inputs are invalid or the queue
        is unstable (``servers <= traffic``).
    """
    checked = validate(
        traffic=(ParameterKind.TRAFFIC, traffic),
        servers=(ParameterKind.SERVERS, servers),
        mst=(ParameterKind.TIME, mst),
        maxtime=(ParameterKind.TIME, maxtime),
    )
    if not checked:
        logger.debug("maxtime_probability rejected: %s", checked.message)
        return None

    if traffic == 0:
        return 1.0
    if servers == 0:
        return 0.0
    if mst == 0:
        return 1.0
    if maxtime == 0:
        return 0.0
    if servers <= traffic:
        return None

    wprob = wait_probability(traffic, servers)
    if wprob is None:
        return None

    return 1 - wprob * math.exp(-(servers - traffic) * maxtime / mst)


def average_wait_time(traffic: float, servers: int, mst: float) -> Optional[float]:
    """Average time spent in queue, in the unit of ``mst``."""
    checked = validate(
        traffic=(ParameterKind.TRAFFIC, traffic),
        servers=(ParameterKind.SERVERS, servers),
        mst=(ParameterKind.TIME, mst),
    )
    if not checked:
        logger.debug("average_wait_time rejected: %s", checked.message)
        return None

    if traffic == 0:
        return 0.0
    if servers == 0:
        return None
    if mst == 0:
        return 0.0
    if servers <= traffic:
        return None

    wprob = wait_probability(traffic, servers)
    if wprob is None:
        return None

    return wprob * mst / (servers - traffic)
