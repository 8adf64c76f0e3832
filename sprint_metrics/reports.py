"""Compute every report for a snapshot without writing any files."""

import logging

from .calculator import run_calculators
from .config_main import CALCULATORS

logger = logging.getLogger(__name__)

REPORT_NAMES = {c: c.report_name for c in CALCULATORS}


def compute_reports(snapshot, settings=None):
    """Run all calculators against `snapshot`.

    Returns a dictionary mapping report name (e.g. ``"velocity"``) to the
    report DataFrame.
    """
    results = run_calculators(CALCULATORS, snapshot, settings or {}, write=False)
    return {REPORT_NAMES[c]: results[c] for c in CALCULATORS}
