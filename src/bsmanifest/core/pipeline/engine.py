from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the manifest workflow:
1. Validates configuration and the install path.
2. Reads the install version and scans the four fixed scan targets in
   parallel threads, hashing files on a dedicated worker pool.
3. Merges the scanned entries into one tree, single-threaded.
4. Renders the manifest and optionally persists it.
"""

import logging
import os
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Optional

from bsmanifest.core.analysis.tree_builder import build_tree, count_directories, iter_leaves, splice
from bsmanifest.core.analysis.tree_renderer import render_report
from bsmanifest.core.pipeline.validator import validate_config
from bsmanifest.core.services.hasher import hash_entries
from bsmanifest.core.services.scanner import scan_files
from bsmanifest.core.services.version import read_version
from bsmanifest.domain.constants import (
    DEFAULT_APP_NAME,
    MANAGED_ALLOW_LIST,
    MANAGED_DIR,
    PLUGINS_DIR,
    POLICY_ERROR,
    data_dir_name,
)
from bsmanifest.domain.pipeline_models import (
    ReportResult,
    create_error_result,
    create_success_result,
)
from bsmanifest.domain.tree_models import Directory, FileEntry, Report, TreeConflictError
from bsmanifest.infra import fs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanTarget:
    """One fixed folder of the install topology."""
    key: str
    rel_dir: str
    recursive: bool = True
    name_filter: Optional[Collection[str]] = None


def scan_targets(app_name: str = DEFAULT_APP_NAME) -> List[ScanTarget]:
    """The known install layout: plugins, managed assemblies, native plugins, root."""
    data_dir = data_dir_name(app_name)
    return [
        ScanTarget("plugins", PLUGINS_DIR),
        ScanTarget("managed", os.path.join(data_dir, MANAGED_DIR), name_filter=MANAGED_ALLOW_LIST),
        ScanTarget("data_plugins", os.path.join(data_dir, PLUGINS_DIR)),
        ScanTarget("root", "", recursive=False),
    ]

# -----------------------------------------------------------------------------
# REPORT ORCHESTRATION
# -----------------------------------------------------------------------------

def generate_report(
        directory: str,
        *,
        app_name: str = DEFAULT_APP_NAME,
        conflict_policy: str = POLICY_ERROR,
        max_workers: Optional[int] = None,
) -> Report:
    """
    Scan, hash and merge an install directory into a titled tree.

    All scans and the version read run concurrently. The first failure in
    any branch cancels queued hash jobs and is re-raised; no partial tree
    is produced.

    Args:
        directory: Install root.
        app_name: Name used to locate the '<app>_Data' folder.
        conflict_policy: How root files colliding with fixed keys are handled.
        max_workers: Hashing pool size; None lets the executor decide.

    Returns:
        Report: Title and merged tree.

    Raises:
        OSError: On any traversal or read failure.
        TreeConflictError: On a tree or merge conflict.
    """
    targets = scan_targets(app_name)
    logger.info(f"Generating manifest for: {directory}")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="HashWorker") as hash_pool, \
            ThreadPoolExecutor(max_workers=len(targets) + 1, thread_name_prefix="ScanBranch") as branch_pool:

        version_future = branch_pool.submit(read_version, directory)
        scan_futures = {
            t.key: branch_pool.submit(_collect_entries, directory, t, hash_pool)
            for t in targets
        }
        _gather_fail_fast([version_future, *scan_futures.values()], hash_pool)

        title = version_future.result()
        entries = {key: fut.result() for key, fut in scan_futures.items()}

    # Fan-in: every tree node is built here, on the calling thread
    root = _merge_layout(entries, app_name, conflict_policy)
    return Report(title=title, root=root)


def generate(directory: str, **kwargs: Any) -> str:
    """Produce the rendered manifest text for an install directory."""
    report = generate_report(directory, **kwargs)
    return render_report(report.title, report.root)

# -----------------------------------------------------------------------------
# PIPELINE ENTRY
# -----------------------------------------------------------------------------

def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        output_path: Optional[str] = None,
        overwrite: bool = False,
) -> ReportResult:
    """
    Execute the full manifest pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        output_path: Optional override for the report destination.
        overwrite: If True, replace an existing report file.

    Returns:
        ReportResult: Object containing status, report text and summary.
    """
    logger.info("Pipeline execution started.")

    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    install_dir = fs.normalize_path(cfg["install_dir"], os.getcwd())
    if not os.path.isdir(install_dir):
        msg = f"Invalid install directory: {install_dir}"
        logger.error(msg)
        return create_error_result(msg, install_dir)

    target_path = output_path if output_path is not None else cfg["output_path"]
    if target_path:
        target_path = fs.normalize_path(target_path, install_dir)
        if fs.exists(target_path) and not overwrite:
            msg = f"Report file already exists and overwrite=False: {target_path}"
            logger.warning(msg)
            return create_error_result(msg, install_dir, {"existing_file": target_path})

    try:
        report = generate_report(
            install_dir,
            app_name=cfg["app_name"],
            conflict_policy=cfg["conflict_policy"],
            max_workers=cfg["max_workers"] or None,
        )
        text = render_report(report.title, report.root)
        written = fs.write_text(target_path, text + "\n") if target_path else ""
    except TreeConflictError as e:
        logger.error(f"Manifest tree conflict: {e}")
        return create_error_result(str(e), install_dir, {"conflict_path": e.path})
    except OSError as e:
        logger.error(f"Manifest generation failed: {e}")
        return create_error_result(str(e), install_dir)

    if written:
        logger.info(f"Manifest saved to file: {written}")

    file_count = sum(1 for _ in iter_leaves(report.root))
    dir_count = count_directories(report.root)
    logger.info(f"Pipeline finished. Files hashed: {file_count}, folders: {dir_count}")

    return create_success_result(
        install_dir=install_dir,
        title=report.title,
        text=text,
        tree=report.root.to_mapping(),
        output_path=written,
        summary_extra={
            "files": file_count,
            "directories": dir_count,
            "app_name": cfg["app_name"],
            "conflict_policy": cfg["conflict_policy"],
        },
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _collect_entries(directory: str, target: ScanTarget, hash_pool: Executor) -> List[FileEntry]:
    """Scan one target folder and hash its files. Runs on a branch thread."""
    folder = os.path.join(directory, target.rel_dir) if target.rel_dir else directory
    rel_paths = scan_files(folder, recursive=target.recursive, name_filter=target.name_filter)
    return hash_entries(folder, rel_paths, executor=hash_pool)


def _gather_fail_fast(futures: List[Future], hash_pool: ThreadPoolExecutor) -> None:
    """
    Wait for every branch future and re-raise the first failure.

    On failure, hash jobs still queued on 'hash_pool' are cancelled. Branches
    and hash jobs already running are left to finish; only their results
    are discarded.
    """
    done, _ = wait(futures, return_when=FIRST_EXCEPTION)
    for fut in done:
        error = fut.exception()
        if error is not None:
            hash_pool.shutdown(wait=False, cancel_futures=True)
            raise error


def _merge_layout(
        entries: Dict[str, List[FileEntry]],
        app_name: str,
        conflict_policy: str,
) -> Directory:
    """Assemble the fixed top-level layout and splice root files onto it."""
    root = Directory({
        PLUGINS_DIR: build_tree(entries["plugins"]),
        data_dir_name(app_name): Directory({
            MANAGED_DIR: build_tree(entries["managed"]),
            PLUGINS_DIR: build_tree(entries["data_plugins"]),
        }),
    })
    return splice(root, build_tree(entries["root"]), policy=conflict_policy)
