from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the pipeline, ensuring that the configuration
dictionary conforms to the expected schema. Handles type coercion and
default value injection to maintain execution stability.
"""

import logging
from typing import Any, Dict, List, Tuple

from bsmanifest.domain.config import get_default_config
from bsmanifest.domain.constants import CONFLICT_POLICIES

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI overrides, persisted JSON) into strictly
    typed parameters. Fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("install_dir", "app_name"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    # An empty output path is meaningful: print to stdout
    output_path = merged.get("output_path")
    merged["output_path"] = "" if output_path is None else _as_str(
        output_path, "", "output_path", warnings, strict
    )

    merged["max_workers"] = _as_non_negative_int(
        merged.get("max_workers"), defaults["max_workers"], "max_workers", warnings, strict
    )
    merged["conflict_policy"] = _as_choice(
        merged.get("conflict_policy"), CONFLICT_POLICIES, defaults["conflict_policy"],
        "conflict_policy", warnings, strict
    )
    merged["log_level"] = _as_choice(
        str(merged.get("log_level") or "").upper() or None, _LOG_LEVELS, defaults["log_level"],
        "log_level", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce worker counts; 0 means 'let the executor decide'."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, str) and not strict and value.strip().isdigit():
        warnings.append(f"Field '{field}' converted from '{value}' to int.")
        return int(value.strip())

    msg = f"Invalid field '{field}': expected non-negative int."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(value: Any, choices: Tuple[str, ...], fallback: str, field: str,
               warnings: List[str], strict: bool) -> str:
    """Restrict a string field to a known set of values."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip() in choices:
        return value.strip()

    msg = f"Invalid field '{field}': '{value}' is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
