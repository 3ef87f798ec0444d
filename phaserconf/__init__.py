# File: phaserconf/__init__.py
# Location: phaserconf/phaserconf/__init__.py

"""
phaserconf Package.

This package provides the parameter front-end of a haplotype phasing tool:
the option registry, validation of the parsed options, and compilation of
the MCMC iteration scheme into an executable plan.
"""

from .schedule import IterationPlan, PhaseKind, compile_scheme
from .version import __version__
