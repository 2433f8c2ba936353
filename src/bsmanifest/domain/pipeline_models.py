from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate
execution outcomes between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportResult:
    """
    Unified result object of a manifest generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        install_dir: Normalized install directory scanned.
        title: Report title (install version or sentinel).
        text: Rendered manifest. Empty on failure.
        tree: Plain nested mapping of the manifest tree.
        output_path: Absolute path of the written report, if any.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    install_dir: str

    title: str = ""
    text: str = ""
    tree: Dict[str, Any] = field(default_factory=dict)
    output_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        install_dir: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> ReportResult:
    """Create a failed result. Never carries partial report text."""
    return ReportResult(
        ok=False,
        error=error,
        install_dir=install_dir,
        summary=summary_extra or {},
    )


def create_success_result(
        install_dir: str,
        title: str,
        text: str,
        tree: Dict[str, Any],
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> ReportResult:
    """
    Create a successful result.

    Args:
        install_dir: Normalized install directory.
        title: Report header title.
        text: Rendered manifest text.
        tree: Nested mapping of the manifest.
        output_path: Where the report was persisted, if anywhere.
        summary_extra: Final execution metrics.

    Returns:
        ReportResult: An immutable success result object.
    """
    return ReportResult(
        ok=True,
        error="",
        install_dir=install_dir,
        title=title,
        text=text,
        tree=tree,
        output_path=output_path,
        summary=summary_extra or {},
    )
