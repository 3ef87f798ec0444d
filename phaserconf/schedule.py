"""MCMC iteration scheme parsing and compilation.

An iteration scheme is a comma-separated list of ``<count><kind>`` tokens,
for example ``5b,1p,1b,1p,1b,1p,5m``. Each kind character selects a phase of
the sampler (``b`` burn-in, ``p`` pruning, ``m`` main) and the count says how
many consecutive iterations of that phase to run. Compilation expands the
tokens literally, so ``5b,1p`` becomes five burn-in phases followed by one
pruning phase.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import EmptySchedule, MalformedToken, UnknownPhaseKind

# One or more ASCII digits, then exactly one kind character. The kind is
# matched loosely here so that the compiler can report unknown kinds by name.
TOKEN_RE = re.compile(r"(?P<count>[0-9]+)(?P<kind>[^0-9\s,])", re.ASCII)

# Repeat counts above 999999999 are rejected as malformed.
MAX_COUNT_DIGITS = 9


class PhaseKind(Enum):
    """Type of a single MCMC iteration."""

    BURN_IN = "b"
    PRUNING = "p"
    MAIN = "m"

    @property
    def label(self) -> str:
        """Return a readable name for the phase kind."""
        return _LABELS[self]


_LABELS = {
    PhaseKind.BURN_IN: "burn-in",
    PhaseKind.PRUNING: "pruning",
    PhaseKind.MAIN: "main",
}


@dataclass(frozen=True)
class IterationToken:
    """A parsed scheme element: repeat count and raw kind character."""

    count: int
    kind: str

    def __post_init__(self):
        """Validate token after initialization."""
        if self.count < 1:
            raise ValueError(f"Iteration count must be positive, got {self.count}")

    def __str__(self) -> str:
        return f"{self.count}{self.kind}"


def tokenize_scheme(scheme: str) -> list[IterationToken]:
    """Split an iteration scheme into tokens.

    Parameters
    ----------
    scheme : str
        Comma-separated scheme such as ``"5b,1p,5m"``.

    Returns
    -------
    list[IterationToken]
        Tokens in source order. Empty when ``scheme`` is the empty string.

    Raises
    ------
    MalformedToken
        If an element is empty, contains whitespace, lacks the leading
        ASCII count, does not end in exactly one kind character, or has a
        count of zero or above 999999999.
    """
    if scheme == "":
        return []

    tokens: list[IterationToken] = []
    for position, element in enumerate(scheme.split(",")):
        m = TOKEN_RE.fullmatch(element)
        if not m:
            raise MalformedToken(element, position)
        digits = m.group("count").lstrip("0")
        if not digits or len(digits) > MAX_COUNT_DIGITS:
            raise MalformedToken(element, position)
        tokens.append(IterationToken(int(digits), m.group("kind")))
    return tokens


def compile_scheme(scheme: str) -> IterationPlan:
    """Compile an iteration scheme into an IterationPlan.

    Parameters
    ----------
    scheme : str
        Comma-separated scheme such as ``"5b,1p,1b,1p,1b,1p,5m"``.

    Returns
    -------
    IterationPlan
        The literal expansion of the scheme, one entry per iteration.

    Raises
    ------
    MalformedToken
        If an element does not match ``<count><kind>``.
    UnknownPhaseKind
        If a kind character is not one of ``b``, ``p`` or ``m``.
    EmptySchedule
        If the scheme contains no tokens.
    """
    tokens = tokenize_scheme(scheme)
    if not tokens:
        raise EmptySchedule()

    phases: list[PhaseKind] = []
    for token in tokens:
        try:
            kind = PhaseKind(token.kind)
        except ValueError:
            raise UnknownPhaseKind(token.kind, str(token)) from None
        phases.extend([kind] * token.count)
    return IterationPlan(tuple(phases))


@dataclass(frozen=True)
class IterationPlan:
    """Ordered, immutable sequence of MCMC phases.

    Downstream samplers iterate over the plan and run each phase in turn.
    """

    phases: tuple[PhaseKind, ...]

    def __post_init__(self):
        """Validate plan after initialization."""
        if not self.phases:
            raise EmptySchedule()

    def __len__(self) -> int:
        return len(self.phases)

    def __iter__(self) -> Iterator[PhaseKind]:
        return iter(self.phases)

    def __getitem__(self, index):
        return self.phases[index]

    def __str__(self) -> str:
        return self.summary()

    def count(self, kind: PhaseKind | str) -> int:
        """Return the number of phases of the given kind.

        Parameters
        ----------
        kind : PhaseKind or str
            Phase kind, or its scheme character (``"b"``, ``"p"``, ``"m"``).
        """
        return self.phases.count(PhaseKind(kind))

    @property
    def n_burn_in(self) -> int:
        return self.count(PhaseKind.BURN_IN)

    @property
    def n_pruning(self) -> int:
        return self.count(PhaseKind.PRUNING)

    @property
    def n_main(self) -> int:
        return self.count(PhaseKind.MAIN)

    @property
    def has_pruning(self) -> bool:
        return PhaseKind.PRUNING in self.phases

    def runs(self) -> list[IterationToken]:
        """Group the phases into maximal runs of the same kind."""
        runs: list[IterationToken] = []
        for kind in self.phases:
            if runs and runs[-1].kind == kind.value:
                runs[-1] = IterationToken(runs[-1].count + 1, kind.value)
            else:
                runs.append(IterationToken(1, kind.value))
        return runs

    def scheme(self) -> str:
        """Return a scheme string that compiles back to this plan."""
        return ",".join(str(run) for run in self.runs())

    def summary(self) -> str:
        """Return a compact description such as ``5b + 1p + 5m``."""
        return " + ".join(str(run) for run in self.runs())
