# File: phaserconf/validators.py
# Location: phaserconf/phaserconf/validators.py

"""
Validation module for phaserconf.

This module provides functions to validate a parsed ParameterSet:
- Mandatory parameters (input, region, output)
- Ranges of scalar parameters (seed, threads, effective size, window)
- Reproducibility of multi-threaded runs (advisory only)
- The MCMC iteration scheme, which is compiled into an IterationPlan

Rules are applied in this order and the first violation stops processing.
"""

import logging
import sys

from .errors import ConfigurationError, MissingRequiredParameter, OutOfRangeParameter
from .parameters import ParameterSet
from .schedule import IterationPlan, compile_scheme

MIN_WINDOW_CM = 0.5
MAX_WINDOW_CM = 10.0

# (option, hint) in the order they are checked.
REQUIRED_PARAMETERS = (
    ("input", "one input file"),
    ("region", "a region or chromosome to phase"),
    ("output", "a phased output file"),
)


def validate_mandatory_parameters(params: ParameterSet) -> None:
    """
    Validate that the input file, region and output file are provided.

    Raises
    ------
    MissingRequiredParameter
        For the first missing option.
    """
    for option, hint in REQUIRED_PARAMETERS:
        if not params.get(option):
            raise MissingRequiredParameter(option, hint)


def validate_ranges(params: ParameterSet) -> None:
    """
    Validate scalar parameter ranges.

    Effective size and window are only checked when the user supplied them.

    Raises
    ------
    OutOfRangeParameter
        For the first value outside its allowed range.
    """
    if params.seed < 0:
        raise OutOfRangeParameter("seed", params.seed, ">= 0")

    if params.thread < 1:
        raise OutOfRangeParameter("thread", params.thread, ">= 1")

    if not params.is_default("effective-size") and params.effective_size < 1:
        raise OutOfRangeParameter("effective-size", params.effective_size, ">= 1")

    if not params.is_default("window") and not MIN_WINDOW_CM <= params.window <= MAX_WINDOW_CM:
        raise OutOfRangeParameter(
            "window", params.window, f"[{MIN_WINDOW_CM:g}, {MAX_WINDOW_CM:g}] cM"
        )


def warn_reproducibility(params: ParameterSet, logger: logging.Logger) -> None:
    """Warn when both --thread and --seed were set explicitly."""
    if not params.is_default("thread") and not params.is_default("seed"):
        logger.warning("Using multi-threading prevents reproducing a run by specifying --seed")


def check_parameters(params: ParameterSet, logger: logging.Logger) -> IterationPlan:
    """
    Apply all validation rules and compile the iteration scheme.

    Parameters
    ----------
    params : ParameterSet
        Parsed options.
    logger : logging.Logger
        Logger receiving advisory warnings.

    Returns
    -------
    IterationPlan
        The compiled MCMC iteration scheme.

    Raises
    ------
    ConfigurationError
        On the first violated rule.
    """
    validate_mandatory_parameters(params)
    validate_ranges(params)
    warn_reproducibility(params, logger)
    plan = compile_scheme(params.mcmc_iterations)
    logger.debug("Compiled MCMC scheme '%s' into %d iterations", params.mcmc_iterations, len(plan))
    return plan


def validate_parameters(params: ParameterSet, logger: logging.Logger) -> IterationPlan:
    """
    Validate parameters, terminating the process on failure.

    Parameters
    ----------
    params : ParameterSet
        Parsed options.
    logger : logging.Logger
        Logger instance for logging errors and warnings.

    Returns
    -------
    IterationPlan
        The compiled MCMC iteration scheme.

    Raises
    ------
    SystemExit
        If any rule is violated.
    """
    try:
        return check_parameters(params, logger)
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)
