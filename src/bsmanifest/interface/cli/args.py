from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates raw argparse
namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from bsmanifest.domain.constants import CONFLICT_POLICIES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the manifest CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="bsmanifest",
        description="Generate a hashed file manifest of a Beat Saber install.",
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="install_dir",
        default=None,
        help="Install directory to scan (defaults to the current directory).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the manifest to this file instead of stdout.",
    )
    p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the output file if it already exists.",
    )

    # --- Topology and Merge Behaviour ---
    p.add_argument(
        "--app-name",
        dest="app_name",
        default=None,
        help="App name used to locate the '<App>_Data' folder.",
    )
    p.add_argument(
        "--on-conflict",
        dest="conflict_policy",
        choices=CONFLICT_POLICIES,
        default=None,
        help="How root files colliding with fixed folders are handled.",
    )
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of hashing threads (0 = automatic).",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the manifest tree as JSON.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration for later runs.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides subset.

    Unset options map to None and are ignored by the merge.
    """
    overrides: Dict[str, Any] = {
        "install_dir": args.install_dir,
        "output_path": args.output_path,
        "app_name": args.app_name,
        "conflict_policy": args.conflict_policy,
        "max_workers": args.max_workers,
    }
    if args.debug:
        overrides["log_level"] = "DEBUG"
    return overrides
