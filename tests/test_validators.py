"""
Tests for parameter validation.
"""

import logging

import pytest

from phaserconf.errors import (
    EmptySchedule,
    MalformedToken,
    MissingRequiredParameter,
    OutOfRangeParameter,
    UnknownPhaseKind,
)
from phaserconf.validators import (
    check_parameters,
    validate_mandatory_parameters,
    validate_parameters,
    validate_ranges,
)

REPRO_WARNING = "Using multi-threading prevents reproducing a run by specifying --seed"


@pytest.mark.unit
class TestMandatoryParameters:
    """Tests for required-presence checks."""

    @pytest.mark.parametrize("missing", ["input", "region", "output"])
    def test_missing(self, make_params, missing):
        """Test that each required option is enforced."""
        params = make_params(**{missing: None})
        with pytest.raises(MissingRequiredParameter) as exc_info:
            validate_mandatory_parameters(params)
        assert exc_info.value.option == missing
        assert f"--{missing}" in str(exc_info.value)

    def test_first_missing_reported(self, make_params):
        """Test that input is checked before region and output."""
        params = make_params(input=None, region=None, output=None)
        with pytest.raises(MissingRequiredParameter) as exc_info:
            validate_mandatory_parameters(params)
        assert exc_info.value.option == "input"

    def test_empty_string_counts_as_missing(self, make_params):
        """Test that an empty path is treated as missing."""
        with pytest.raises(MissingRequiredParameter):
            validate_mandatory_parameters(make_params(region=""))


@pytest.mark.unit
class TestRanges:
    """Tests for scalar range checks."""

    def test_seed_boundary(self, make_params):
        """Test that seed 0 is accepted and -1 rejected."""
        validate_ranges(make_params(seed=0))
        with pytest.raises(OutOfRangeParameter) as exc_info:
            validate_ranges(make_params(seed=-1))
        assert exc_info.value.option == "seed"
        assert exc_info.value.value == -1

    def test_thread_boundary(self, make_params):
        """Test that at least one thread is required."""
        validate_ranges(make_params(thread=1))
        with pytest.raises(OutOfRangeParameter) as exc_info:
            validate_ranges(make_params(thread=0))
        assert exc_info.value.option == "thread"

    def test_effective_size(self, make_params):
        """Test that a supplied effective size must be positive."""
        validate_ranges(make_params(effective_size=1))
        with pytest.raises(OutOfRangeParameter) as exc_info:
            validate_ranges(make_params(effective_size=0))
        assert exc_info.value.option == "effective-size"

    @pytest.mark.parametrize("window", [0.5, 2.5, 10.0, 10])
    def test_window_accepted(self, make_params, window):
        """Test that window bounds are inclusive."""
        validate_ranges(make_params(window=window))

    @pytest.mark.parametrize("window", [0.49999, 10.00001, 0.0, -1.0])
    def test_window_rejected(self, make_params, window):
        """Test that windows outside [0.5, 10] cM are rejected."""
        with pytest.raises(OutOfRangeParameter) as exc_info:
            validate_ranges(make_params(window=window))
        assert exc_info.value.option == "window"
        assert exc_info.value.allowed == "[0.5, 10] cM"

    def test_checks_run_in_order(self, make_params):
        """Test that seed is reported before thread and window."""
        params = make_params(seed=-5, thread=0, window=20.0)
        with pytest.raises(OutOfRangeParameter) as exc_info:
            validate_ranges(params)
        assert exc_info.value.option == "seed"


@pytest.mark.unit
class TestCheckParameters:
    """Tests for the full validation sequence."""

    def test_valid_defaults(self, make_params, phaser_logger):
        """Test that required values plus defaults compile the default plan."""
        plan = check_parameters(make_params(), phaser_logger)
        assert len(plan) == 15

    def test_required_checked_before_ranges(self, make_params, phaser_logger):
        """Test that a missing input is reported before a bad window."""
        params = make_params(input=None, window=42.0)
        with pytest.raises(MissingRequiredParameter) as exc_info:
            check_parameters(params, phaser_logger)
        assert exc_info.value.option == "input"

    def test_ranges_checked_before_scheme(self, make_params, phaser_logger):
        """Test that a range error wins over a bad scheme."""
        params = make_params(thread=0, mcmc_iterations="")
        with pytest.raises(OutOfRangeParameter):
            check_parameters(params, phaser_logger)

    @pytest.mark.parametrize(
        "scheme, error",
        [("", EmptySchedule), ("0b", MalformedToken), ("3x", UnknownPhaseKind)],
    )
    def test_scheme_errors_propagate(self, make_params, phaser_logger, scheme, error):
        """Test that compiler errors surface from validation."""
        with pytest.raises(error):
            check_parameters(make_params(mcmc_iterations=scheme), phaser_logger)

    def test_custom_scheme(self, make_params, phaser_logger):
        """Test that the supplied scheme is the one compiled."""
        plan = check_parameters(make_params(mcmc_iterations="10b,10m"), phaser_logger)
        assert plan.n_burn_in == 10
        assert plan.n_main == 10
        assert not plan.has_pruning


@pytest.mark.unit
class TestReproducibilityWarning:
    """Tests for the advisory thread/seed warning."""

    def test_warns_when_both_supplied(self, make_params, phaser_logger, caplog):
        """Test that the warning fires when thread and seed are both set."""
        with caplog.at_level(logging.WARNING, logger="phaserconf"):
            check_parameters(make_params(thread=4, seed=42), phaser_logger)
        assert REPRO_WARNING in caplog.text

    def test_warns_for_single_thread(self, make_params, phaser_logger, caplog):
        """Test that an explicit --thread 1 still triggers the warning."""
        with caplog.at_level(logging.WARNING, logger="phaserconf"):
            check_parameters(make_params(thread=1, seed=5), phaser_logger)
        assert REPRO_WARNING in caplog.text

    @pytest.mark.parametrize("overrides", [{}, {"thread": 4}, {"seed": 42}])
    def test_no_warning_otherwise(self, make_params, phaser_logger, caplog, overrides):
        """Test that defaulted thread or seed keeps quiet."""
        with caplog.at_level(logging.WARNING, logger="phaserconf"):
            check_parameters(make_params(**overrides), phaser_logger)
        assert REPRO_WARNING not in caplog.text

    def test_warning_is_not_fatal(self, make_params, phaser_logger):
        """Test that validation still returns a plan."""
        plan = check_parameters(make_params(thread=4, seed=42), phaser_logger)
        assert len(plan) == 15


class TestValidateParameters:
    """Tests for the process-ending wrapper."""

    def test_exits_on_failure(self, make_params, phaser_logger, caplog):
        """Test that a violation logs one error and exits with status 1."""
        with caplog.at_level(logging.ERROR, logger="phaserconf"):
            with pytest.raises(SystemExit) as exc_info:
                validate_parameters(make_params(region=None), phaser_logger)
        assert exc_info.value.code == 1
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "--region" in errors[0].getMessage()

    def test_returns_plan(self, make_params, phaser_logger):
        """Test that a valid set returns the compiled plan."""
        assert validate_parameters(make_params(), phaser_logger).n_pruning == 3
