"""Erlang C formulas and their inverses for capacity planning."""

from .erlangb import DEFAULT_PRECISION, blocking_probability, generic_servers, generic_traffic
from .formulas import average_wait_time, maxtime_probability, wait_probability
from .inversions import (
    max_time_maxtime,
    servers_maxtime,
    servers_waitprob,
    servers_waittime,
    service_time2_maxtime,
    service_time2_waittime,
    service_time_maxtime,
    service_time_waittime,
    traffic_maxtime,
    traffic_waitprob,
    traffic_waittime,
)
from .metrics import ErlangCMetrics, ErlangCParams, erlangc_metrics, relative_error
from .scenarios import Scenario, get_params, get_scenario, list_scenarios
from .solver import cross
from .validation import ParameterKind, ValidationResult, validate

__all__ = [
    "DEFAULT_PRECISION",
    "ErlangCMetrics",
    "ErlangCParams",
    "ParameterKind",
    "Scenario",
    "ValidationResult",
    "average_wait_time",
    "blocking_probability",
    "cross",
    "erlangc_metrics",
    "generic_servers",
    "generic_traffic",
    "get_params",
    "get_scenario",
    "list_scenarios",
    "max_time_maxtime",
    "maxtime_probability",
    "relative_error",
    "servers_maxtime",
    "servers_waitprob",
    "servers_waittime",
    "service_time2_maxtime",
    "service_time2_waittime",
    "service_time_maxtime",
    "service_time_waittime",
    "traffic_maxtime",
    "traffic_waitprob",
    "traffic_waittime",
    "validate",
    "wait_probability",
]
