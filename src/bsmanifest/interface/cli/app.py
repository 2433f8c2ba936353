from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, persisted settings and CLI overrides), pipeline execution
and output of the manifest.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from bsmanifest.core.pipeline.engine import run_pipeline
from bsmanifest.core.pipeline.validator import validate_config
from bsmanifest.domain.config import get_default_config, load_config, save_config
from bsmanifest.domain.pipeline_models import ReportResult
from bsmanifest.infra.fs import normalize_path
from bsmanifest.infra.logging import LoggingConfig, configure_logging, get_logger
from bsmanifest.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    # Tree glyphs need UTF-8 even on legacy Windows consoles
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()
    overrides = cli_args.args_to_overrides(args)
    clean_conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    # 3. Logging bootstrap (console on stderr so stdout stays the manifest)
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=True,
        log_file=args.log_file,
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf)

    # Short-circuit if configuration dump is requested
    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Pre-flight input verification
    install_dir = normalize_path(clean_conf["install_dir"], os.getcwd())
    if not os.path.isdir(install_dir):
        msg = f"Install directory does not exist: {install_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf, overwrite=bool(args.overwrite))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    # 6. Output rendering phase
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(_json_payload(result), ensure_ascii=False, indent=2))
    elif result.output_path:
        print(f"Manifest written to: {result.output_path} ({result.summary.get('files', 0)} files)")
    else:
        print(result.text)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None override values into the base configuration.

    Only known keys are merged.
    """
    out = dict(base)
    keys_to_merge = [
        "install_dir", "output_path", "app_name",
        "conflict_policy", "max_workers", "log_level",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _json_payload(result: ReportResult) -> Dict[str, Any]:
    return {
        "title": result.title,
        "install_dir": result.install_dir,
        "output_path": result.output_path,
        "summary": result.summary,
        "tree": result.tree,
    }

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
