"""Build orchestration: draft -> expanded spec -> SVG.

This module chains expansion, validation and compilation for single drafts
and fans batches of drafts out over worker processes.

Key components:
- build_icon: Top-level picklable function for parallel execution
- IconPipeline: Orchestrator class for single and batch builds
"""

import time
import traceback
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import structlog

from iconspec.config import IconSpecSettings
from iconspec.core.compiler import SvgCompiler
from iconspec.core.expander import PresetExpander
from iconspec.core.validator import GRID_EPSILON
from iconspec.domain import ExpandOptions
from iconspec.utils import BuildLogger, BuildStats

ProgressCallback = Callable[[int, int, str, bool], None]


def _draft_name(draft_dict: Any) -> str:
    if isinstance(draft_dict, Mapping):
        name = draft_dict.get("name")
        if isinstance(name, str) and name:
            return name
    return "unknown"


def build_icon(
    draft_dict: Mapping[str, Any],
    options_dict: Mapping[str, Any] | None = None,
    epsilon: float = GRID_EPSILON,
) -> dict[str, Any]:
    """Expand, validate and compile a single draft.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Uses the built-in preset registry.

    Args:
        draft_dict: Draft document
        options_dict: Expansion options document (all enabled when None)
        epsilon: Grid tolerance for validation

    Returns:
        Dictionary containing either:
        - Built: {"name", "ok": True, "svg", "svgMinified", "metadata",
          "warnings", "changes", "expanded", "duration_ms"}
        - Rejected: {"name", "ok": False, "issues", "warnings", "changes",
          "expanded", "duration_ms"}
        - Error: {"error", "name", "traceback", "duration_ms"}
    """
    start_time = time.time()
    name = _draft_name(draft_dict)

    try:
        options = (
            ExpandOptions.model_validate(options_dict) if options_dict is not None else None
        )
        expansion = PresetExpander().expand(draft_dict, options)
        expanded = expansion.expanded

        compiler = SvgCompiler(epsilon=epsilon)
        validation = compiler.validator.validate(expanded)
        result: dict[str, Any] = {
            "name": expanded.name,
            "warnings": [issue.to_dict() for issue in validation.warnings],
            "changes": [change.to_dict() for change in expansion.changes],
            "expanded": expanded.to_dict(),
        }

        compiled = compiler.render(expanded, validation)
        result.update(compiled.to_dict())

        result["duration_ms"] = (time.time() - start_time) * 1000
        return result

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "name": name,
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class IconPipeline:
    """Orchestrates icon builds, optionally across worker processes.

    Example:
        settings = IconSpecSettings()
        pipeline = IconPipeline(settings)
        results, stats = pipeline.build_many(drafts, max_workers=4)
    """

    def __init__(self, config: IconSpecSettings) -> None:
        """Initialize the pipeline with configuration.

        Args:
            config: Settings providing expansion defaults and worker count
        """
        self.config = config
        self.logger = structlog.get_logger("iconspec.pipeline")

    def options_dict(self) -> dict[str, Any]:
        """Expansion options derived from the configured defaults."""
        return ExpandOptions(**self.config.expand.model_dump()).to_dict()

    def run(self, draft: Mapping[str, Any]) -> dict[str, Any]:
        """Build one draft in-process.

        Returns:
            The build_icon result dictionary
        """
        return build_icon(draft, self.options_dict(), self.config.validation.grid_epsilon)

    def build_many(
        self,
        drafts: Sequence[Mapping[str, Any]],
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> tuple[list[dict[str, Any]], BuildStats]:
        """Build a batch of drafts.

        Runs in-process when max_workers is 1 or there is at most one
        draft, otherwise in a process pool.

        Args:
            drafts: Draft documents
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, icon_name, success)
                for progress updates

        Returns:
            Results in input order, and the batch statistics

        Raises:
            KeyboardInterrupt: If the build is cancelled by user
        """
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        build_logger = BuildLogger(self.logger)
        stats = build_logger.stats
        stats.start_time = time.time()

        self.logger.info("Starting build", icon_count=len(drafts), max_workers=max_workers)

        if max_workers == 1 or len(drafts) <= 1:
            results = self._build_serial(drafts, build_logger, progress_callback)
        else:
            results = self._build_parallel(drafts, max_workers, build_logger, progress_callback)

        stats.end_time = time.time()
        self.logger.info(
            "Build complete",
            built=stats.built_count,
            rejected=stats.rejected_count,
            errors=stats.error_count,
            warnings=stats.warning_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return results, stats

    def _build_serial(
        self,
        drafts: Sequence[Mapping[str, Any]],
        build_logger: BuildLogger,
        progress_callback: ProgressCallback | None,
    ) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        for index, draft in enumerate(drafts):
            name = _draft_name(draft)
            build_logger.log_icon_start(name)
            result = self.run(draft)
            success = self._record(result, name, build_logger)
            results.append(result)
            if progress_callback is not None:
                progress_callback(index + 1, len(drafts), name, success)
        return results

    def _build_parallel(
        self,
        drafts: Sequence[Mapping[str, Any]],
        max_workers: int | None,
        build_logger: BuildLogger,
        progress_callback: ProgressCallback | None,
    ) -> list[dict[str, Any]]:
        """Build drafts using ProcessPoolExecutor, keeping input order."""
        options_dict = self.options_dict()
        epsilon = self.config.validation.grid_epsilon
        results: list[dict[str, Any] | None] = [None] * len(drafts)

        total = len(drafts)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, draft in enumerate(drafts):
                build_logger.log_icon_start(_draft_name(draft))
                future = executor.submit(build_icon, dict(draft), options_dict, epsilon)
                pending_futures[future] = index

            try:
                for future in as_completed(pending_futures):
                    index = pending_futures.pop(future)
                    name = _draft_name(drafts[index])

                    try:
                        result = future.result()
                    except Exception as e:
                        # Executor-level error
                        result = {
                            "error": str(e),
                            "name": name,
                            "traceback": traceback.format_exc(),
                            "duration_ms": 0.0,
                        }

                    success = self._record(result, name, build_logger)
                    results[index] = result

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return [result for result in results if result is not None]

    @staticmethod
    def _record(result: dict[str, Any], name: str, build_logger: BuildLogger) -> bool:
        """Log one build result; True if it produced markup."""
        if "error" in result:
            build_logger.log_icon_error(
                icon_name=name,
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False
        if not result["ok"]:
            build_logger.log_icon_rejected(
                result["name"], [issue["code"] for issue in result["issues"]]
            )
            return False
        build_logger.log_icon_built(
            icon_name=result["name"],
            warning_count=len(result["warnings"]),
            changes=len(result["changes"]),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True
