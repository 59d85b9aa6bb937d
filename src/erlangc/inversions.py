"""
Inverse Erlang C problems: find servers, traffic, service time or deadline
that yield a target wait probability, service level or average wait.

Every function validates its own arguments and returns ``None`` when no
answer exists. Searches over traffic take an optional ``precision``; when it
is omitted :data:`erlangc.erlangb.DEFAULT_PRECISION` is used.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .erlangb import DEFAULT_PRECISION, MAX_SERVERS, generic_servers, generic_traffic
from .formulas import average_wait_time, maxtime_probability, wait_probability
from .solver import cross
from .validation import ParameterKind, ValidationResult, validate

logger = logging.getLogger(__name__)

TRAFFIC = ParameterKind.TRAFFIC
SERVERS = ParameterKind.SERVERS
PROBABILITY = ParameterKind.PROBABILITY
TIME = ParameterKind.TIME
PRECISION = ParameterKind.PRECISION


def _rejected(operation: str, checked: ValidationResult) -> None:
    logger.debug("%s rejected: %s", operation, checked.message)


def _resolve(precision: Optional[float]) -> float:
    return DEFAULT_PRECISION if precision is None else precision


def _server_limit(traffic: float) -> int:
    # A stable queue needs more servers than traffic; leave room above that.
    return max(MAX_SERVERS, 2 * math.ceil(traffic) + 1)


# Wait probability


def servers_waitprob(traffic: float, wait_probability_target: float) -> Optional[int]:
    """Minimum servers keeping the wait probability at or below the target."""
    checked = validate(
        traffic=(TRAFFIC, traffic),
        wait_probability=(PROBABILITY, wait_probability_target),
    )
    if not checked:
        _rejected("servers_waitprob", checked)
        return None
    if traffic == 0:
        return 0
    if wait_probability_target == 0:
        return None
    if wait_probability_target == 1:
        return 0

    def still_waiting(servers: int) -> bool:
        v = wait_probability(traffic, servers)
        return v is not None and v > wait_probability_target

    return generic_servers(still_waiting, limit=_server_limit(traffic))


def traffic_waitprob(
    servers: int, wait_probability_target: float, precision: Optional[float] = None
) -> Optional[float]:
    """Maximum traffic ``servers`` can carry with the target wait probability."""
    checked = validate(
        servers=(SERVERS, servers),
        wait_probability=(PROBABILITY, wait_probability_target),
        precision=(PRECISION, precision),
    )
    if not checked:
        _rejected("traffic_waitprob", checked)
        return None
    if servers == 0:
        return 0.0
    if wait_probability_target == 0:
        return 0.0
    if wait_probability_target == 1:
        return None

    def below_target(traffic: float) -> bool:
        v = wait_probability(traffic, servers)
        return v is not None and v < wait_probability_target

    return generic_traffic(below_target, _resolve(precision), servers)


# Probability of being served within a deadline


def servers_maxtime(
    traffic: float, maxtime_probability_target: float, mst: float, maxtime: float
) -> Optional[int]:
    """Minimum servers so that the target fraction is served within ``maxtime``."""
    checked = validate(
        traffic=(TRAFFIC, traffic),
        maxtime_probability=(PROBABILITY, maxtime_probability_target),
        mst=(TIME, mst),
        maxtime=(TIME, maxtime),
    )
    if not checked:
        _rejected("servers_maxtime", checked)
        return None
    if traffic == 0:
        return 0
    if mst == 0:
        return 1
    if maxtime_probability_target == 0:
        return None
    if maxtime == 0:
        return None
    # Never strictly reached with a finite number of servers.
    if maxtime_probability_target == 1:
        return None

    def below_target(servers: int) -> bool:
        v = maxtime_probability(traffic, servers, mst, maxtime)
        return v is None or v < maxtime_probability_target

    return generic_servers(below_target, limit=_server_limit(traffic))


def traffic_maxtime(
    servers: int,
    maxtime_probability_target: float,
    mst: float,
    maxtime: float,
    precision: Optional[float] = None,
) -> Optional[float]:
    """Maximum traffic still served within ``maxtime`` with the target probability."""
    checked = validate(
        servers=(SERVERS, servers),
        maxtime_probability=(PROBABILITY, maxtime_probability_target),
        mst=(TIME, mst),
        maxtime=(TIME, maxtime),
        precision=(PRECISION, precision),
    )
    if not checked:
        _rejected("traffic_maxtime", checked)
        return None
    if servers == 0:
        return 0.0
    if maxtime_probability_target == 0:
        return 0.0
    if mst == 0:
        return None
    if maxtime == 0:
        return None

    def above_target(traffic: float) -> bool:
        v = maxtime_probability(traffic, servers, mst, maxtime)
        return v is not None and v > maxtime_probability_target

    return generic_traffic(above_target, _resolve(precision), servers)


def service_time_maxtime(
    traffic: float, servers: int, maxtime_probability_target: float, maxtime: float
) -> Optional[float]:
    """
    Mean service time giving the target probability of service within ``maxtime``.

    Solves ``1 - C * exp(-(S - A) * maxtime / mst) = p`` for ``mst``. Returns
    ``None`` when ``1 - p >= C``: the target then holds for any service time.
    """
    checked = validate(
        traffic=(TRAFFIC, traffic),
        servers=(SERVERS, servers),
        maxtime_probability=(PROBABILITY, maxtime_probability_target),
        maxtime=(TIME, maxtime),
    )
    if not checked:
        _rejected("service_time_maxtime", checked)
        return None
    if traffic == 0:
        return 0.0
    if servers == 0:
        return None
    if maxtime_probability_target == 0:
        return 0.0
    if maxtime_probability_target == 1:
        return None
    if maxtime == 0:
        return 0.0
    if servers <= traffic:
        return None

    wprob = wait_probability(traffic, servers)
    if wprob <= 1 - maxtime_probability_target:
        return None

    ratio = (1 - maxtime_probability_target) / wprob
    return -(servers - traffic) * maxtime / math.log(ratio)


def service_time2_maxtime(
    frequency: float,
    servers: int,
    maxtime_probability_target: float,
    maxtime: float,
    precision: Optional[float] = None,
) -> Optional[float]:
    """
    Mean service time giving the target service level at a fixed call rate.

    Unlike :func:`service_time_maxtime` the traffic is not fixed: it grows with
    the service time as ``A = frequency * mst``. With ``lt = frequency * maxtime``
    the condition becomes ``ln C(A) = ln(1 - p) + lt * (S - A) / A``, whose left
    side rises and right side falls with ``A``; the crossing is found by
    bisection on traffic and converted back to a service time.
    """
    checked = validate(
        frequency=(TRAFFIC, frequency),
        servers=(SERVERS, servers),
        maxtime_probability=(PROBABILITY, maxtime_probability_target),
        maxtime=(TIME, maxtime),
        precision=(PRECISION, precision),
    )
    if not checked:
        _rejected("service_time2_maxtime", checked)
        return None
    if frequency == 0:
        return 0.0
    if servers == 0:
        return None
    if maxtime_probability_target == 0:
        return 0.0
    if maxtime_probability_target == 1:
        return None
    if maxtime == 0:
        return 0.0

    the_log = math.log(1 - maxtime_probability_target)
    lambda_tm = frequency * maxtime

    def log_wait_probability(traffic: float) -> float:
        wprob = wait_probability(traffic, servers)
        return math.log(wprob) if wprob > 0 else -math.inf

    def deadline_curve(traffic: float) -> float:
        return the_log + lambda_tm * (servers - traffic) / traffic

    traffic = cross(
        log_wait_probability,
        deadline_curve,
        servers * lambda_tm / (lambda_tm - the_log),
        servers,
        _resolve(precision) * frequency,
    )
    return traffic / frequency


def max_time_maxtime(
    traffic: float, servers: int, maxtime_probability_target: float, mst: float
) -> Optional[float]:
    """
    Deadline within which the target fraction of requests is served.

    Returns ``None`` when ``1 - p >= C``: any positive deadline then meets the
    target, so there is no smallest one.
    """
    checked = validate(
        traffic=(TRAFFIC, traffic),
        servers=(SERVERS, servers),
        maxtime_probability=(PROBABILITY, maxtime_probability_target),
        mst=(TIME, mst),
    )
    if not checked:
        _rejected("max_time_maxtime", checked)
        return None
    if traffic == 0:
        return 0.0
    if servers == 0:
        return None
    if mst == 0:
        return 0.0
    if maxtime_probability_target == 0:
        return 0.0
    if maxtime_probability_target == 1:
        return None
    if servers <= traffic:
        return None

    wprob = wait_probability(traffic, servers)
    if wprob <= 1 - maxtime_probability_target:
        return None

    ratio = (1 - maxtime_probability_target) / wprob
    return -mst / (math.log(ratio) * (servers - traffic))


# Average wait time


def servers_waittime(traffic: float, awt: float, mst: float) -> Optional[int]:
    """Minimum servers keeping the average wait at or below ``awt``."""
    checked = validate(
        traffic=(TRAFFIC, traffic),
        average_wait_time=(TIME, awt),
        mst=(TIME, mst),
    )
    if not checked:
        _rejected("servers_waittime", checked)
        return None
    if traffic == 0:
        return 0
    if mst == 0:
        return 1
    if awt == 0:
        return None

    def too_slow(servers: int) -> bool:
        v = average_wait_time(traffic, servers, mst)
        return v is None or v > awt

    return generic_servers(too_slow, limit=_server_limit(traffic))


def traffic_waittime(
    servers: int, awt: float, mst: float, precision: Optional[float] = None
) -> Optional[float]:
    """Maximum traffic ``servers`` can carry with an average wait below ``awt``."""
    checked = validate(
        servers=(SERVERS, servers),
        average_wait_time=(TIME, awt),
        mst=(TIME, mst),
        precision=(PRECISION, precision),
    )
    if not checked:
        _rejected("traffic_waittime", checked)
        return None
    if servers == 0:
        return 0.0
    if awt == 0:
        return None
    if mst == 0:
        return None

    def below_target(traffic: float) -> bool:
        v = average_wait_time(traffic, servers, mst)
        return v is not None and v < awt

    return generic_traffic(below_target, _resolve(precision), servers)


def service_time_waittime(traffic: float, servers: int, awt: float) -> Optional[float]:
    """Mean service time giving an average wait of ``awt`` at fixed traffic."""
    checked = validate(
        traffic=(TRAFFIC, traffic),
        servers=(SERVERS, servers),
        average_wait_time=(TIME, awt),
    )
    if not checked:
        _rejected("service_time_waittime", checked)
        return None
    if traffic == 0:
        return 0.0
    if servers == 0:
        return None
    if awt == 0:
        return 0.0
    if servers <= traffic:
        return None

    wprob = wait_probability(traffic, servers)
    if wprob == 0:
        return None
    return awt * (servers - traffic) / wprob


def service_time2_waittime(
    frequency: float, servers: int, awt: float, precision: Optional[float] = None
) -> Optional[float]:
    """
    Mean service time giving an average wait of ``awt`` at a fixed call rate.

    With ``A = frequency * mst`` and ``la = frequency * awt`` the condition is
    ``C(A) = la * (S / A - 1)``; solved by bisection on traffic.
    """
    checked = validate(
        frequency=(TRAFFIC, frequency),
        servers=(SERVERS, servers),
        average_wait_time=(TIME, awt),
        precision=(PRECISION, precision),
    )
    if not checked:
        _rejected("service_time2_waittime", checked)
        return None
    if frequency == 0:
        return None
    if servers == 0:
        return None
    if awt == 0:
        return 0.0

    lambda_ta = frequency * awt

    def wait_curve(traffic: float) -> float:
        return wait_probability(traffic, servers)

    def delay_curve(traffic: float) -> float:
        return lambda_ta * (servers / traffic - 1)

    traffic = cross(
        wait_curve,
        delay_curve,
        servers * lambda_ta / (1 + lambda_ta),
        servers,
        _resolve(precision) * frequency,
    )
    return traffic / frequency
