# File: phaserconf/errors.py
# Location: phaserconf/phaserconf/errors.py

"""
Exception classes for configuration failures.

Every error raised while parsing, validating or compiling the run
configuration derives from ConfigurationError. All of them are fatal: the
command-line entry point reports a single line and exits before any phasing
work starts.
"""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Base exception for all configuration errors."""

    def __init__(
        self, message: str, option: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ):
        """Initialize configuration error.

        Parameters
        ----------
        message : str
            Error message
        option : str, optional
            Long name of the offending option
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.option = option
        self.details = details or {}


class ArgumentSyntaxError(ConfigurationError):
    """Raised when the command line or a configuration file is malformed."""


class MissingRequiredParameter(ConfigurationError):
    """Raised when a mandatory option was not supplied."""

    def __init__(self, option: str, hint: str):
        """Initialize missing parameter error."""
        message = f"You must specify {hint} using --{option}"
        super().__init__(message, option)


class OutOfRangeParameter(ConfigurationError):
    """Raised when an option value falls outside its allowed range."""

    def __init__(self, option: str, value: Any, allowed: str):
        """Initialize out-of-range error."""
        message = f"Invalid value {value} for --{option}: allowed range is {allowed}"
        super().__init__(message, option, {"value": value, "allowed": allowed})
        self.value = value
        self.allowed = allowed


class ScheduleError(ConfigurationError):
    """Base class for iteration scheme errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize schedule error."""
        super().__init__(message, "mcmc-iterations", details)


class MalformedToken(ScheduleError):
    """Raised when a scheme element is not a count followed by one kind character."""

    def __init__(self, token: str, position: int):
        """Initialize malformed token error."""
        message = (
            f"Malformed iteration token [{token}] at position {position}; "
            "expected a positive count followed by one of b, p or m (e.g. 5b)"
        )
        super().__init__(message, {"token": token, "position": position})
        self.token = token
        self.position = position


class UnknownPhaseKind(ScheduleError):
    """Raised when a scheme element uses a kind character other than b, p or m."""

    def __init__(self, kind: str, token: str):
        """Initialize unknown phase kind error."""
        message = f"Unknown iteration type [{kind}] in token [{token}]; use b, p or m"
        super().__init__(message, {"kind": kind, "token": token})
        self.kind = kind
        self.token = token


class EmptySchedule(ScheduleError):
    """Raised when the iteration scheme contains no tokens."""

    def __init__(self):
        """Initialize empty schedule error."""
        super().__init__("The MCMC iteration scheme is empty; specify at least one iteration")
