"""
Parameter Registry - declarative table of every accepted run-time option.

The registry is the single source of truth for option names, value types,
defaults and help text. The command-line parser and the reporter are both
built from it; no parsing logic lives here.

ParameterSet is the immutable, typed result of parsing. It is produced once
by the command-line layer and passed explicitly to every consumer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterator

VALUE_TYPES = ("flag", "int", "float", "str")

DEFAULT_SCHEME = "5b,1p,1b,1p,1b,1p,5m"


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of a single option."""

    name: str
    value_type: str
    description: str
    default: Any = None
    short: str | None = None
    required: bool = False

    def __post_init__(self):
        """Validate parameter declaration after initialization."""
        if not self.name:
            raise ValueError("Parameter name cannot be empty")
        if self.value_type not in VALUE_TYPES:
            raise ValueError(f"Unknown value type '{self.value_type}' for --{self.name}")
        if self.required and self.default is not None:
            raise ValueError(f"Required parameter --{self.name} cannot have a default")

    @property
    def dest(self) -> str:
        """Attribute name of the option on a ParameterSet."""
        return self.name.replace("-", "_").lower()

    @property
    def flags(self) -> list[str]:
        """Command-line spellings, short alias first."""
        spellings = [f"-{self.short}"] if self.short else []
        spellings.append(f"--{self.name}")
        return spellings


@dataclass(frozen=True)
class ParameterSection:
    """Named group of related options, used for help and report layout."""

    title: str
    parameters: tuple[ParameterSpec, ...]


SECTIONS: tuple[ParameterSection, ...] = (
    ParameterSection(
        "Basic options",
        (
            ParameterSpec("help", "flag", "Produce help message"),
            ParameterSpec("seed", "int", "Seed of the random number generator", 15052011),
            ParameterSpec("thread", "int", "Number of thread used", 1, short="T"),
        ),
    ),
    ParameterSection(
        "Input files",
        (
            ParameterSpec(
                "input",
                "str",
                "Genotypes to be phased in VCF/BCF format",
                short="I",
                required=True,
            ),
            ParameterSpec(
                "reference", "str", "Reference panel of haplotypes in VCF/BCF format", short="H"
            ),
            ParameterSpec("scaffold", "str", "Scaffold of haplotypes in VCF/BCF format", short="S"),
            ParameterSpec("map", "str", "Genetic map", short="M"),
            ParameterSpec("region", "str", "Target region", short="R", required=True),
            ParameterSpec(
                "use-PS", "float", "Informs phasing using PS field from read based phasing"
            ),
        ),
    ),
    ParameterSection(
        "MCMC parameters",
        (
            ParameterSpec("mcmc-iterations", "str", "Iteration scheme of the MCMC", DEFAULT_SCHEME),
            ParameterSpec("mcmc-prune", "float", "Pruning threshold in genotype graphs", 0.999),
        ),
    ),
    ParameterSection(
        "PBWT parameters",
        (
            ParameterSpec(
                "pbwt-modulo",
                "float",
                "Storage frequency of PBWT indexes in cM (i.e. 0.025 means storage every 0.025 cM)",
                0.025,
            ),
            ParameterSpec("pbwt-depth", "int", "Depth of PBWT indexes to condition on", 4),
            ParameterSpec(
                "pbwt-mac", "int", "Minimal Minor Allele Count at which PBWT is evaluated", 2
            ),
            ParameterSpec(
                "pbwt-mdr", "float", "Maximal Missing Data Rate at which PBWT is evaluated", 0.05
            ),
        ),
    ),
    ParameterSection(
        "IBD2 parameters",
        (
            ParameterSpec(
                "ibd2-length",
                "float",
                "Minimal size of IBD2 tracks for building copying constraints",
                3.0,
            ),
            ParameterSpec(
                "ibd2-maf",
                "float",
                "Minimal Minor Allele Frequency for variants to be considered in the IBD2 mapping",
                0.01,
            ),
            ParameterSpec(
                "ibd2-mdr",
                "float",
                "Maximal Missing data rate for variants to be considered in the IBD2 mapping",
                0.05,
            ),
            ParameterSpec(
                "ibd2-count", "int", "Minimal number of filtered variants in IBD2 tracks", 150
            ),
            ParameterSpec(
                "ibd2-output",
                "str",
                "Output all IBD2 constraints in the specified file (useful for debugging!)",
            ),
        ),
    ),
    ParameterSection(
        "HMM parameters",
        (
            ParameterSpec(
                "window", "float", "Minimal size of the phasing window in cM", 2.5, short="W"
            ),
            ParameterSpec("effective-size", "int", "Effective size of the population", 15000),
        ),
    ),
    ParameterSection(
        "Output files",
        (
            ParameterSpec(
                "output",
                "str",
                "Phased haplotypes in VCF/BCF format",
                short="O",
                required=True,
            ),
            ParameterSpec("log", "str", "Log file"),
        ),
    ),
)


def iter_parameters(include_help: bool = False) -> Iterator[tuple[ParameterSection, ParameterSpec]]:
    """Yield (section, parameter) pairs in display order.

    Parameters
    ----------
    include_help : bool
        Whether to include the ``--help`` entry, which argparse provides
        itself and which carries no value.
    """
    for section in SECTIONS:
        for spec in section.parameters:
            if spec.name == "help" and not include_help:
                continue
            yield section, spec


def get_parameter(name: str) -> ParameterSpec:
    """Look up a parameter by long name (with or without leading dashes).

    Raises
    ------
    KeyError
        If no such parameter is declared.
    """
    key = name.lstrip("-")
    for _, spec in iter_parameters(include_help=True):
        if spec.name == key:
            return spec
    raise KeyError(f"Unknown parameter '{name}'")


def default_values() -> dict[str, Any]:
    """Return the default of every valued parameter keyed by long name."""
    return {spec.name: spec.default for _, spec in iter_parameters()}


@dataclass(frozen=True)
class ParameterSet:
    """Parsed, typed option values for one run.

    ``supplied`` holds the long names of the options the user set explicitly,
    either on the command line or in a configuration file. Every other
    attribute carries its registry default.
    """

    seed: int = 15052011
    thread: int = 1
    input: str | None = None
    reference: str | None = None
    scaffold: str | None = None
    map: str | None = None
    region: str | None = None
    use_ps: float | None = None
    mcmc_iterations: str = DEFAULT_SCHEME
    mcmc_prune: float = 0.999
    pbwt_modulo: float = 0.025
    pbwt_depth: int = 4
    pbwt_mac: int = 2
    pbwt_mdr: float = 0.05
    ibd2_length: float = 3.0
    ibd2_maf: float = 0.01
    ibd2_mdr: float = 0.05
    ibd2_count: int = 150
    ibd2_output: str | None = None
    window: float = 2.5
    effective_size: int = 15000
    output: str | None = None
    log: str | None = None
    supplied: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_values(cls, values: dict[str, Any]) -> "ParameterSet":
        """Build a ParameterSet from user-supplied values keyed by long name.

        Options absent from ``values`` take their registry default and are
        recorded as defaulted.
        """
        kwargs = {}
        for name, value in values.items():
            kwargs[get_parameter(name).dest] = value
        return cls(**kwargs, supplied=frozenset(name.lstrip("-") for name in values))

    def get(self, name: str) -> Any:
        """Return the value of an option by long name."""
        return getattr(self, get_parameter(name).dest)

    def is_default(self, name: str) -> bool:
        """Whether the registry default was used for an option."""
        return get_parameter(name).name not in self.supplied

    def as_dict(self) -> dict[str, Any]:
        """Return all option values keyed by long name."""
        return {spec.name: self.get(spec.name) for _, spec in iter_parameters()}


# The registry and the ParameterSet must declare the same options and defaults.
_REGISTRY_DEFAULTS = {spec.dest: spec.default for _, spec in iter_parameters()}
_FIELD_DEFAULTS = {f.name: f.default for f in fields(ParameterSet) if f.name != "supplied"}
if _REGISTRY_DEFAULTS != _FIELD_DEFAULTS:
    raise RuntimeError("Parameter registry and ParameterSet declarations disagree")
