# File: phaserconf/config.py
# Location: phaserconf/phaserconf/config.py

"""
Configuration management module.

This module handles loading option values from a JSON file. The file holds
an object keyed by long option names, for example::

    {"region": "chr20", "mcmc-iterations": "10b,1p,10m", "thread": 8}

Values from the file count as explicitly supplied and are overridden by the
command line. Defaults are not stored here; they live in the parameter
registry.
"""

import json
import os
from typing import Any, Dict, Optional

from .errors import ArgumentSyntaxError
from .parameters import get_parameter

# JSON types accepted for each registry value type.
_JSON_TYPES = {
    "int": (int,),
    "float": (int, float),
    "str": (str,),
}


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load option values from a JSON file.

    Parameters
    ----------
    config_file : str, optional
        Path to a configuration file in JSON format. If None, no values are
        loaded and an empty dictionary is returned.

    Returns
    -------
    dict
        Configuration dictionary loaded from the JSON file.

    Raises
    ------
    FileNotFoundError
        If the specified configuration file does not exist.
    ValueError
        If there is an error parsing the JSON configuration file.
    """
    if not config_file:
        return {}

    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file '{config_file}' not found.")

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing JSON configuration: {e}")

    if not isinstance(config, dict):
        raise ValueError("JSON configuration must be an object keyed by option name")
    return config


def coerce_config_values(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check configuration values against the parameter registry.

    Parameters
    ----------
    config : dict
        Raw values keyed by long option name.

    Returns
    -------
    dict
        Typed values keyed by canonical long option name.

    Raises
    ------
    ArgumentSyntaxError
        If a key is not a known option or a value has the wrong type.
    """
    values: Dict[str, Any] = {}
    for key, value in config.items():
        try:
            spec = get_parameter(key)
        except KeyError:
            raise ArgumentSyntaxError(f"Unknown option '{key}' in configuration file", key)

        if spec.value_type == "flag":
            raise ArgumentSyntaxError(f"Option '{key}' cannot be set in a configuration file", key)

        # bool is a subclass of int, but true/false is never a valid count.
        if isinstance(value, bool) or not isinstance(value, _JSON_TYPES[spec.value_type]):
            raise ArgumentSyntaxError(
                f"Option '{key}' expects a value of type {spec.value_type}, got {value!r}",
                spec.name,
            )

        values[spec.name] = float(value) if spec.value_type == "float" else value
    return values
