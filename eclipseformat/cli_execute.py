"""
CLI Phase 3: Execute the run.

Runs the batch walker and maps its outcome to an exit code.
"""

from __future__ import annotations

from .cli_config import ExecutionPlan
from .errors import PartialFailure
from .logging_utils import LOG, fmt_summary


def execute_run(plan: ExecutionPlan) -> int:
    """
    Phase 3: Format the target described by the plan.

    Returns exit code (0 = success, including nothing to do;
    1 = one or more files failed).
    """
    config = plan.config
    exit_code = 0

    try:
        summary = plan.walker.run(config.target, recursive=config.recursive, dry_run=config.dry_run)
    except PartialFailure as e:
        summary = e.summary
        LOG.error("Encountered %d errors", summary.error_count)
        exit_code = 1

    if config.target.is_dir():
        if config.dry_run and summary.changed_count == 0 and summary.error_count == 0:
            LOG.info("[DRY RUN] No files would be formatted")
        LOG.debug(
            "Formatted %d files%s", summary.changed_count, " (dry run)" if config.dry_run else ""
        )

    LOG.debug("Summary: %s", fmt_summary(
        summary.processed_count, summary.changed_count, summary.error_count, config.dry_run
    ))
    return exit_code
