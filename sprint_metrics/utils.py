"""Utility functions for Sprint Metrics.

This module provides small helpers shared by the loader, the calculators
and the command line tool.
"""

import logging
import os.path

import seaborn as sns

logger = logging.getLogger(__name__)


def extend_dict(d, e):
    """Extend dictionary d with entries from e, returning a new dictionary."""
    r = d.copy()
    r.update(e)
    return r


def get_extension(filename):
    """Get file extension from filename."""
    return os.path.splitext(filename)[1].lower()


def set_chart_context(context):
    """Set seaborn chart context."""
    sns.set_context(context)


def resolve_path(path, cwd=None):
    """Resolve `path` against `cwd` unless it is already absolute."""
    if path is None or cwd is None or os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(cwd, path))
