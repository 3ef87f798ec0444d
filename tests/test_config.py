"""
Tests for JSON configuration file loading.
"""

import json

import pytest

from phaserconf.config import coerce_config_values, load_config
from phaserconf.errors import ArgumentSyntaxError


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file(self):
        """Test that no config file yields no values."""
        assert load_config(None) == {}

    def test_load(self, tmp_path):
        """Test loading a JSON object."""
        config_file = tmp_path / "run.json"
        config_file.write_text(json.dumps({"region": "chr20", "thread": 4}))
        assert load_config(str(config_file)) == {"region": "chr20", "thread": 4}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.json"))

    def test_invalid_json(self, tmp_path):
        """Test that invalid JSON raises ValueError."""
        config_file = tmp_path / "broken.json"
        config_file.write_text("{region: chr20")
        with pytest.raises(ValueError, match="Error parsing JSON"):
            load_config(str(config_file))

    def test_not_an_object(self, tmp_path):
        """Test that a top-level list is rejected."""
        config_file = tmp_path / "list.json"
        config_file.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config(str(config_file))


@pytest.mark.unit
class TestCoerceConfigValues:
    """Tests for type-checking configuration values."""

    def test_valid_values(self):
        """Test that values matching the registry are accepted."""
        values = coerce_config_values(
            {"thread": 8, "window": 3, "--mcmc-iterations": "10b,10m", "use-PS": 0.001}
        )
        assert values == {
            "thread": 8,
            "window": 3.0,
            "mcmc-iterations": "10b,10m",
            "use-PS": 0.001,
        }
        assert isinstance(values["window"], float)

    def test_unknown_option(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ArgumentSyntaxError, match="Unknown option 'threads'"):
            coerce_config_values({"threads": 8})

    @pytest.mark.parametrize(
        "key, value",
        [("thread", "8"), ("thread", 2.5), ("thread", True), ("window", "2.5"), ("region", 20)],
    )
    def test_wrong_type(self, key, value):
        """Test that values of the wrong type are rejected."""
        with pytest.raises(ArgumentSyntaxError) as exc_info:
            coerce_config_values({key: value})
        assert exc_info.value.option == key

    def test_help_not_configurable(self):
        """Test that --help cannot be set from a file."""
        with pytest.raises(ArgumentSyntaxError):
            coerce_config_values({"help": True})
