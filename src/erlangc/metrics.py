"""Steady-state metric bundle for an Erlang C (M/M/S) system."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .erlangb import blocking_probability
from .formulas import average_wait_time, maxtime_probability, wait_probability
from .validation import ParameterKind, validate


@dataclass(frozen=True)
class ErlangCParams:
    """Offered traffic (Erlangs), number of servers and mean service time."""

    traffic: float
    servers: int
    mst: float

    def __post_init__(self) -> None:
        checked = validate(
            traffic=(ParameterKind.TRAFFIC, self.traffic),
            servers=(ParameterKind.SERVERS, self.servers),
            mst=(ParameterKind.TIME, self.mst),
        )
        if not checked:
            raise ValueError(f"Invalid parameters: {checked.message}.")
        if self.servers < 1:
            raise ValueError("Number of servers must be >= 1.")

    @property
    def frequency(self) -> float:
        """Arrival rate implied by traffic and service time."""
        if self.mst == 0:
            return 0.0
        return self.traffic / self.mst


@dataclass(frozen=True)
class ErlangCMetrics:
    """Bundle of theoretical steady-state metrics for an M/M/S system."""

    traffic: float
    servers: int
    occupancy: float
    blocking: float
    Pwait: float
    Lq: float
    L: float
    Wq: float
    W: float
    service_level: Optional[float] = None

    def as_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


def erlangc_metrics(params: ErlangCParams, maxtime: Optional[float] = None) -> ErlangCMetrics:
    """
    Compute Erlang C metrics, optionally with the service level at ``maxtime``.

    Queue lengths are in requests, times in the unit of ``params.mst``.

    Raises:
        ValueError: when servers <= traffic (no steady state) or ``maxtime``
                    is not a valid duration.
    """
    if maxtime is not None and not ParameterKind.TIME.accepts(maxtime):
        raise ValueError(f"maxtime must be {ParameterKind.TIME.constraint}.")

    a = params.traffic
    s = params.servers
    if a > 0 and s <= a:
        raise ValueError("Unstable system: servers must exceed traffic for Erlang C.")

    service_level = None
    if maxtime is not None:
        service_level = maxtime_probability(a, s, params.mst, maxtime)

    if a == 0:
        return ErlangCMetrics(
            traffic=0.0,
            servers=s,
            occupancy=0.0,
            blocking=0.0,
            Pwait=0.0,
            Lq=0.0,
            L=0.0,
            Wq=0.0,
            W=params.mst,
            service_level=service_level,
        )

    pwait = wait_probability(a, s)
    Wq = average_wait_time(a, s, params.mst)
    Lq = pwait * a / (s - a)
    return ErlangCMetrics(
        traffic=a,
        servers=s,
        occupancy=a / s,
        blocking=blocking_probability(a, s),
        Pwait=pwait,
        Lq=Lq,
        L=Lq + a,
        Wq=Wq,
        W=Wq + params.mst,
        service_level=service_level,
    )


def relative_error(value: float, reference_value: float) -> float:
    """Return |value-ref| / ref guarding division by zero."""
    if reference_value == 0:
        return 0.0 if value == 0 else float("inf")
    return abs(value - reference_value) / abs(reference_value)
