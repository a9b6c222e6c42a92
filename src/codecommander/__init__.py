from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from codecommander.diff import DiffResult, compute_diff, unified_diff
from codecommander.errors import (
    CodeCommanderConfigError,
    CodeCommanderError,
    CodeCommanderInputError,
    CodeCommanderInputTooLargeError,
    CodeCommanderPatternError,
)


def _package_version() -> str:
    try:
        return version("codecommander")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "CodeCommanderConfigError",
    "CodeCommanderError",
    "CodeCommanderInputError",
    "CodeCommanderInputTooLargeError",
    "CodeCommanderPatternError",
    "DiffResult",
    "__version__",
    "compute_diff",
    "unified_diff",
]
