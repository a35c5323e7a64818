# src/tableausim/cli.py
"""
Command-line interface for batch DC operating-point runs.

Usage::

    python -m tableausim solve circuit.net
    python -m tableausim solve circuit.net --currents
    python -m tableausim solve circuit.net --voltages --config solver.yaml
    python -m tableausim validate circuit.net
"""
import argparse
import sys
from typing import Optional, Sequence

from .config import ConfigParsingError, SolverConfig, load_solver_config
from .errors import DiagnosableError, NetlistLoadError
from .log_config import setup_logging
from .parser import NetlistParser
from .reporting import format_currents, format_singularity, format_voltages
from .simulation import CircuitSession
from .validation import TopologyValidator

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_SINGULAR = 2


def _load_config(args: argparse.Namespace) -> SolverConfig:
    if not args.config:
        return SolverConfig(log_level=args.log_level) if args.log_level else SolverConfig()
    config = load_solver_config(args.config)
    if args.log_level:
        config = SolverConfig(pivot_tolerance=config.pivot_tolerance, log_level=args.log_level,
                              validate_topology=config.validate_topology)
    return config


def cmd_solve(args: argparse.Namespace) -> int:
    """Load a netlist, solve it and print the requested results."""
    try:
        config = _load_config(args)
    except ConfigParsingError as e:
        print(e.get_diagnostic_report(), file=sys.stderr)
        return EXIT_LOAD_ERROR
    setup_logging(config.log_level)

    session = CircuitSession(config)
    try:
        result = session.load_file(args.netlist)
    except NetlistLoadError as e:
        print(str(e), file=sys.stderr)
        return EXIT_LOAD_ERROR

    if result.is_singular:
        print(format_singularity(result.singularity), file=sys.stderr)
        return EXIT_SINGULAR

    op = session.operating_point()
    show_all = not (args.currents or args.voltages)
    lines = []
    if args.currents or show_all:
        lines.extend(format_currents(op))
    if args.voltages or show_all:
        lines.extend(format_voltages(op))
    print("\n".join(lines))
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    """Parse a netlist and print topology issues without solving."""
    setup_logging(args.log_level or "WARNING")
    try:
        netlist = NetlistParser().parse_file(args.netlist)
    except DiagnosableError as e:
        print(e.get_diagnostic_report(), file=sys.stderr)
        return EXIT_LOAD_ERROR

    issues = TopologyValidator(netlist).validate()
    for issue in issues:
        print(str(issue))
    if not issues:
        print(f"No issues found ({netlist.node_count} node(s), {netlist.branch_count} branch(es)).")
    return EXIT_LOAD_ERROR if any(i.is_error for i in issues) else EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tableausim",
        description="DC operating point of resistive netlists via the sparse tableau method.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    solve_parser = sub.add_parser("solve", help="Solve a netlist and print currents and voltages")
    solve_parser.add_argument("netlist", help="Path to the netlist file")
    solve_parser.add_argument("--currents", action="store_true", help="Print branch currents")
    solve_parser.add_argument("--voltages", action="store_true", help="Print node and branch voltages")
    solve_parser.add_argument("--config", help="YAML solver configuration file")
    solve_parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                              help="Override the configured log level")
    solve_parser.set_defaults(func=cmd_solve)

    val_parser = sub.add_parser("validate", help="Check netlist topology without solving")
    val_parser.add_argument("netlist", help="Path to the netlist file")
    val_parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    val_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)
