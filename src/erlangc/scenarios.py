"""Pre-defined call-center planning scenarios."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .metrics import ErlangCParams


@dataclass(frozen=True)
class Scenario:
    name: str
    traffic: float
    servers: int
    mst: float
    maxtime: float


SCENARIOS: Dict[str, Scenario] = {
    "SMALL": Scenario(name="SMALL", traffic=5.0, servers=10, mst=60.0, maxtime=20.0),  # ρ = 0.50
    "DESK": Scenario(name="DESK", traffic=12.0, servers=15, mst=180.0, maxtime=20.0),  # ρ = 0.80
    "HOTLINE": Scenario(name="HOTLINE", traffic=45.0, servers=50, mst=240.0, maxtime=30.0),  # ρ = 0.90
}


def list_scenarios() -> Iterable[str]:
    """Return available scenario identifiers."""
    return sorted(SCENARIOS.keys())


def get_scenario(name: str) -> Scenario:
    key = name.upper()
    if key not in SCENARIOS:
        raise KeyError(f"Scenario '{name}' is not defined. Available: {list_scenarios()}")
    return SCENARIOS[key]


def get_params(name: str) -> ErlangCParams:
    """Return `ErlangCParams` for a named scenario."""
    scenario = get_scenario(name)
    return ErlangCParams(traffic=scenario.traffic, servers=scenario.servers, mst=scenario.mst)
