"""Command-line interface for phaserconf."""

import argparse
import datetime
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import coerce_config_values, load_config
from .errors import ArgumentSyntaxError, ConfigurationError
from .parameters import SECTIONS, ParameterSet, ParameterSpec, iter_parameters
from .reporter import format_banner, format_report, parameter_table
from .schedule import IterationPlan
from .utils import LOG_LEVELS, add_log_file, close_logging, configure_logging, log_lines
from .validators import check_parameters, validate_parameters
from .version import __version__

logger = logging.getLogger("phaserconf")

ARG_TYPES = {"int": int, "float": float, "str": str}


@dataclass(frozen=True)
class RunConfiguration:
    """Validated options and compiled iteration plan handed to the phaser."""

    parameters: ParameterSet
    plan: IterationPlan


class PhaserArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentSyntaxError instead of exiting."""

    def error(self, message):
        self.print_usage(sys.stderr)
        raise ArgumentSyntaxError(message)


def _help_text(spec: ParameterSpec) -> str:
    if spec.required:
        return f"{spec.description} (required)"
    if spec.default is not None:
        return f"{spec.description} (default: {spec.default})"
    return spec.description


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser, one group per registry section.

    Options the user does not give are left out of the namespace, so that
    explicitly supplied values can be told apart from defaults.
    """
    parser = PhaserArgumentParser(
        prog="phaserconf",
        description="phaserconf: configure a haplotype phasing run.",
        argument_default=argparse.SUPPRESS,
        add_help=False,
    )

    for section in SECTIONS:
        group = parser.add_argument_group(section.title)
        for spec in section.parameters:
            if spec.value_type == "flag":
                group.add_argument(*spec.flags, action="help", help=spec.description)
                continue
            group.add_argument(
                *spec.flags,
                dest=spec.dest,
                type=ARG_TYPES[spec.value_type],
                metavar=spec.value_type.upper(),
                help=_help_text(spec),
            )

        if section.title == "Basic options":
            group.add_argument(
                "--version",
                action="version",
                version=f"phaserconf {__version__}",
                help="Show the current version and exit",
            )
            group.add_argument(
                "--log-level",
                choices=list(LOG_LEVELS),
                default="INFO",
                help="Set the logging level",
            )
            group.add_argument(
                "-c",
                "--config",
                default=None,
                help="JSON file of option values, keyed by long option name",
            )

    return parser


def parse_args(args_list=None):
    """Parse command line arguments.

    Parameters
    ----------
    args_list : list, optional
        List of arguments to parse. If None, uses sys.argv

    Returns
    -------
    argparse.Namespace
        Parsed arguments

    Raises
    ------
    ArgumentSyntaxError
        If the arguments are malformed.
    """
    parser = create_parser()
    return parser.parse_args(args_list)


def load_config_values(config_file: Optional[str]) -> Dict[str, Any]:
    """Load and type-check option values from a JSON configuration file."""
    try:
        cfg = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        raise ArgumentSyntaxError(str(e), "config") from e
    return coerce_config_values(cfg)


def resolve_parameters(
    args: argparse.Namespace, config_values: Optional[Dict[str, Any]] = None
) -> ParameterSet:
    """Merge configuration file values and command-line values.

    Command-line values take precedence. Both count as user-supplied.
    """
    values: Dict[str, Any] = dict(config_values or {})
    for _, spec in iter_parameters():
        if hasattr(args, spec.dest):
            values[spec.name] = getattr(args, spec.dest)
    return ParameterSet.from_values(values)


def load_run_configuration(
    args_list: Optional[List[str]] = None, run_logger: Optional[logging.Logger] = None
) -> RunConfiguration:
    """Parse, validate and compile a run configuration without exiting.

    Parameters
    ----------
    args_list : list, optional
        List of arguments to parse. If None, uses sys.argv
    run_logger : logging.Logger, optional
        Logger receiving advisory warnings. Defaults to the package logger.

    Raises
    ------
    ConfigurationError
        On the first malformed argument or violated rule.
    """
    args = parse_args(args_list)
    params = resolve_parameters(args, load_config_values(args.config))
    return RunConfiguration(params, check_parameters(params, run_logger or logger))


def main(args_list: Optional[List[str]] = None) -> int:
    """Run main entry point for phaserconf CLI.

    Steps:
        1. Parse arguments.
        2. Configure logging, load the optional config file and open the log file.
        3. Validate parameters and compile the MCMC iteration scheme.
        4. Report files and parameters.

    Validation failures terminate the process with status 1.
    """
    start_time = datetime.datetime.now()

    try:
        args = parse_args(args_list)
    except ArgumentSyntaxError as e:
        sys.stderr.write(f"Error parsing command line arguments: {e}\n")
        return 1

    run_logger = configure_logging(args.log_level)
    file_handler = None
    try:
        params = resolve_parameters(args, load_config_values(args.config))
        if params.log:
            file_handler = add_log_file(run_logger, params.log, args.log_level)

        log_lines(run_logger, format_banner(start_time))
        plan = validate_parameters(params, run_logger)
        run_config = RunConfiguration(params, plan)

        table = parameter_table(run_config.parameters)
        run_logger.debug("Resolved parameters:\n%s", table.to_string(index=False))
        log_lines(run_logger, format_report(run_config.parameters, run_config.plan))
        return 0
    except ConfigurationError as e:
        run_logger.error("%s", e)
        return 1
    finally:
        close_logging(run_logger, file_handler)


if __name__ == "__main__":
    sys.exit(main())
