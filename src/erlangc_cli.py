"""Command line interface for Erlang C metrics and their inverse problems."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from erlangc import (
    ErlangCMetrics,
    ErlangCParams,
    average_wait_time,
    erlangc_metrics,
    get_scenario,
    list_scenarios,
    max_time_maxtime,
    maxtime_probability,
    relative_error,
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
    wait_probability,
)

logger = logging.getLogger(__name__)

Args = Dict[str, float]


@dataclass(frozen=True)
class Inversion:
    """An inverse problem exposed on the command line."""

    func: Callable[..., Optional[float]]
    params: Tuple[str, ...]
    # Maps (arguments, result) to (reproduced value, target value).
    check: Callable[[Args, float], Tuple[Optional[float], float]]
    help: str
    takes_precision: bool = False


INVERSIONS: Dict[str, Inversion] = {
    "servers_waitprob": Inversion(
        func=servers_waitprob,
        params=("traffic", "wait_probability"),
        check=lambda a, r: (wait_probability(a["traffic"], r), a["wait_probability"]),
        help="Servers needed for a target wait probability.",
    ),
    "traffic_waitprob": Inversion(
        func=traffic_waitprob,
        params=("servers", "wait_probability"),
        check=lambda a, r: (wait_probability(r, a["servers"]), a["wait_probability"]),
        help="Traffic carried at a target wait probability.",
        takes_precision=True,
    ),
    "servers_maxtime": Inversion(
        func=servers_maxtime,
        params=("traffic", "maxtime_probability", "mst", "maxtime"),
        check=lambda a, r: (
            maxtime_probability(a["traffic"], r, a["mst"], a["maxtime"]),
            a["maxtime_probability"],
        ),
        help="Servers needed for a target service level.",
    ),
    "traffic_maxtime": Inversion(
        func=traffic_maxtime,
        params=("servers", "maxtime_probability", "mst", "maxtime"),
        check=lambda a, r: (
            maxtime_probability(r, a["servers"], a["mst"], a["maxtime"]),
            a["maxtime_probability"],
        ),
        help="Traffic carried at a target service level.",
        takes_precision=True,
    ),
    "service_time_maxtime": Inversion(
        func=service_time_maxtime,
        params=("traffic", "servers", "maxtime_probability", "maxtime"),
        check=lambda a, r: (
            maxtime_probability(a["traffic"], a["servers"], r, a["maxtime"]),
            a["maxtime_probability"],
        ),
        help="Service time meeting a service level at fixed traffic.",
    ),
    "service_time2_maxtime": Inversion(
        func=service_time2_maxtime,
        params=("frequency", "servers", "maxtime_probability", "maxtime"),
        check=lambda a, r: (
            maxtime_probability(a["frequency"] * r, a["servers"], r, a["maxtime"]),
            a["maxtime_probability"],
        ),
        help="Service time meeting a service level at a fixed call rate.",
        takes_precision=True,
    ),
    "max_time_maxtime": Inversion(
        func=max_time_maxtime,
        params=("traffic", "servers", "maxtime_probability", "mst"),
        check=lambda a, r: (
            maxtime_probability(a["traffic"], a["servers"], a["mst"], r),
            a["maxtime_probability"],
        ),
        help="Deadline met with a target probability.",
    ),
    "servers_waittime": Inversion(
        func=servers_waittime,
        params=("traffic", "average_wait_time", "mst"),
        check=lambda a, r: (
            average_wait_time(a["traffic"], r, a["mst"]),
            a["average_wait_time"],
        ),
        help="Servers needed for a target average wait.",
    ),
    "traffic_waittime": Inversion(
        func=traffic_waittime,
        params=("servers", "average_wait_time", "mst"),
        check=lambda a, r: (
            average_wait_time(r, a["servers"], a["mst"]),
            a["average_wait_time"],
        ),
        help="Traffic carried at a target average wait.",
        takes_precision=True,
    ),
    "service_time_waittime": Inversion(
        func=service_time_waittime,
        params=("traffic", "servers", "average_wait_time"),
        check=lambda a, r: (
            average_wait_time(a["traffic"], a["servers"], r),
            a["average_wait_time"],
        ),
        help="Service time giving a target average wait at fixed traffic.",
    ),
    "service_time2_waittime": Inversion(
        func=service_time2_waittime,
        params=("frequency", "servers", "average_wait_time"),
        check=lambda a, r: (
            average_wait_time(a["frequency"] * r, a["servers"], r),
            a["average_wait_time"],
        ),
        help="Service time giving a target average wait at a fixed call rate.",
        takes_precision=True,
    ),
}


def _option(name: str) -> str:
    return "--" + name.replace("_", "-")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Erlang C (M/M/S) capacity planning calculator."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    metrics = commands.add_parser("metrics", help="Evaluate the Erlang C metrics.")
    metrics.add_argument("--traffic", type=float, help="Offered traffic in Erlangs.")
    metrics.add_argument("--servers", type=int, help="Number of servers.")
    metrics.add_argument("--mst", type=float, help="Mean service time.")
    metrics.add_argument("--maxtime", type=float, help="Deadline for the service level.")
    metrics.add_argument(
        "--scenario",
        type=str.upper,
        choices=list(list_scenarios()),
        help="Named scenario shortcut.",
    )

    solve = commands.add_parser("solve", help="Solve an inverse Erlang C problem.")
    operations = solve.add_subparsers(dest="operation", required=True)
    for name, inversion in INVERSIONS.items():
        op = operations.add_parser(name, help=inversion.help)
        for param in inversion.params:
            op.add_argument(
                _option(param),
                dest=param,
                type=int if param == "servers" else float,
                required=True,
            )
        if inversion.takes_precision:
            op.add_argument(
                "--precision",
                type=float,
                default=None,
                help="Convergence tolerance (default: module precision).",
            )

    sweep = commands.add_parser("sweep", help="Tabulate metrics over a range of servers.")
    sweep.add_argument("--traffic", type=float, required=True, help="Offered traffic in Erlangs.")
    sweep.add_argument("--mst", type=float, required=True, help="Mean service time.")
    sweep.add_argument("--maxtime", type=float, default=20.0, help="Deadline for the service level.")
    sweep.add_argument("--servers-from", type=int, default=1, help="Smallest server count.")
    sweep.add_argument("--servers-to", type=int, required=True, help="Largest server count.")
    sweep.add_argument(
        "--target-service-level",
        type=float,
        default=0.8,
        help="Service level used to recommend a server count.",
    )
    sweep.add_argument(
        "--outputs",
        type=Path,
        default=Path("outputs/sweep.csv"),
        help="Path where the CSV table will be written.",
    )
    return parser.parse_args(argv)


def resolve_params(args: argparse.Namespace) -> Tuple[ErlangCParams, Optional[float]]:
    """Return the system parameters and the deadline (if any)."""
    if args.scenario:
        scenario = get_scenario(args.scenario)
        params = ErlangCParams(
            traffic=scenario.traffic, servers=scenario.servers, mst=scenario.mst
        )
        maxtime = args.maxtime if args.maxtime is not None else scenario.maxtime
        return params, maxtime

    if args.traffic is None or args.servers is None or args.mst is None:
        raise SystemExit("Either --scenario or all of --traffic, --servers and --mst must be provided.")
    try:
        params = ErlangCParams(traffic=args.traffic, servers=args.servers, mst=args.mst)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    return params, args.maxtime


def print_metrics(metrics: ErlangCMetrics) -> None:
    print("\nErlang C:")
    for key, value in metrics.as_dict().items():
        if value is None:
            continue
        print(f"  {key:<13}: {value:>12.6f}")


def run_metrics(args: argparse.Namespace) -> None:
    params, maxtime = resolve_params(args)
    try:
        metrics = erlangc_metrics(params, maxtime=maxtime)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    print_metrics(metrics)


def run_solve(args: argparse.Namespace) -> Optional[float]:
    inversion = INVERSIONS[args.operation]
    values = {name: getattr(args, name) for name in inversion.params}
    kwargs = {}
    if inversion.takes_precision:
        kwargs["precision"] = args.precision

    logger.info("solving %s with %s", args.operation, values)
    result = inversion.func(*(values[name] for name in inversion.params), **kwargs)
    if result is None:
        raise SystemExit(f"{args.operation}: no solution for {values}.")

    print(f"\n{args.operation}: {result:.6f}")
    reproduced, target = inversion.check(values, result)
    if reproduced is None:
        print("  round trip : n/a")
    else:
        err = relative_error(reproduced, target)
        print(f"  round trip : {reproduced:.6f} vs target {target:.6f} ({err * 100:.4f}%)")
    return result


def sweep_rows(
    traffic: float, mst: float, maxtime: float, servers_grid: Iterable[int]
) -> List[Dict[str, Optional[float]]]:
    """Metrics for each stable server count of the grid."""
    rows = []
    for servers in tqdm(servers_grid, desc="Sweeping", unit="S"):
        servers = int(servers)
        if servers <= traffic:
            logger.debug("skipping unstable configuration S=%d", servers)
            continue
        params = ErlangCParams(traffic=traffic, servers=servers, mst=mst)
        rows.append(erlangc_metrics(params, maxtime=maxtime).as_dict())
    return rows


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def run_sweep(args: argparse.Namespace) -> pd.DataFrame:
    if args.servers_from < 1 or args.servers_to < args.servers_from:
        raise SystemExit("--servers-from must be >= 1 and not exceed --servers-to.")

    servers_grid = np.arange(args.servers_from, args.servers_to + 1)
    try:
        rows = sweep_rows(args.traffic, args.mst, args.maxtime, servers_grid)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    df = pd.DataFrame(rows)
    if df.empty:
        raise SystemExit("No stable configuration in the requested server range.")

    ensure_parent(args.outputs)
    df.to_csv(args.outputs, index=False)

    recommended = servers_maxtime(args.traffic, args.target_service_level, args.mst, args.maxtime)
    print(df.to_string(index=False, float_format=lambda v: f"{v:.6f}"))
    if recommended is not None:
        print(
            f"\nServers for {args.target_service_level:.0%} within {args.maxtime:g}: "
            f"{recommended}"
        )
    print(f"\nTable saved to {args.outputs.resolve()}")
    return df


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level)

    if args.command == "metrics":
        run_metrics(args)
    elif args.command == "solve":
        run_solve(args)
    else:
        run_sweep(args)


if __name__ == "__main__":
    main()
