"""
Reporter - human-readable summaries of a validated run configuration.

All functions are pure: they format a ParameterSet and an IterationPlan
into lines of text and never validate or log. Layout lives in the Jinja2
templates under ``templates/``.
"""

import datetime
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import pandas as pd
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .parameters import ParameterSet, iter_parameters
from .schedule import IterationPlan, PhaseKind
from .version import __version__

TEMPLATES_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    if not TEMPLATES_DIR.exists():
        raise FileNotFoundError(f"Templates directory not found at: {TEMPLATES_DIR}")
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _render(template_name: str, **context) -> List[str]:
    text = _environment().get_template(template_name).render(**context)
    return [line for line in text.splitlines() if line.strip()]


def format_banner(run_date: Optional[datetime.datetime] = None) -> List[str]:
    """Return the program title, version and run date lines."""
    run_date = run_date or datetime.datetime.now()
    return _render(
        "banner.txt.j2",
        version=__version__,
        run_date=run_date.strftime("%d/%m/%Y - %H:%M:%S"),
    )


def format_files(params: ParameterSet) -> List[str]:
    """
    Return the ``Files:`` block.

    Optional files that were not given are omitted.
    """
    return _render("files.txt.j2", p=params)


def format_parameters(params: ParameterSet, plan: IterationPlan) -> List[str]:
    """
    Return the ``Parameters:`` block.

    Parameters
    ----------
    params : ParameterSet
        Validated options.
    plan : IterationPlan
        The compiled MCMC iteration scheme.
    """
    phase_counts = [f"{plan.count(kind)} {kind.label}" for kind in PhaseKind if plan.count(kind)]
    return _render("parameters.txt.j2", p=params, plan=plan, phase_counts=phase_counts)


def format_report(params: ParameterSet, plan: IterationPlan) -> List[str]:
    """Return the Files block followed by the Parameters block."""
    return format_files(params) + format_parameters(params, plan)


def parameter_table(params: ParameterSet) -> pd.DataFrame:
    """
    Tabulate every option with its value and where the value came from.

    Returns
    -------
    pd.DataFrame
        Columns ``section``, ``option``, ``value`` and ``source``
        (``"user"`` or ``"default"``), one row per option in display order.
    """
    values = params.as_dict()
    rows = []
    for section, spec in iter_parameters():
        rows.append(
            {
                "section": section.title,
                "option": f"--{spec.name}",
                "value": values[spec.name],
                "source": "default" if params.is_default(spec.name) else "user",
            }
        )
    return pd.DataFrame(rows, columns=["section", "option", "value", "source"])
