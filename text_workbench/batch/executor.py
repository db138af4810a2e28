"""Sequential execution of saved batches.

Each step's output is the next step's input. A reference that no longer
resolves degrades to a no-op for that step; any other workbench error
stops the run and nothing is written back.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from ..editor import Editor
from ..editor import FileEditor
from ..editor import something_selected
from ..exceptions import SelectionRequiredError
from ..exceptions import TextWorkbenchError
from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error
from ..messages import t
from ..models.operations import BatchProcess
from ..models.operations import Scope
from ..notifications import LoggingNotifier
from ..notifications import Notifier
from .dispatcher import OperationDispatcher
from .models import BatchApplyResult
from .models import OperationResult

logger = logging.getLogger(__name__)


class BatchStepError(TextWorkbenchError):
    """A batch step failed; carries the results gathered up to that point."""

    default_code = "BATCH_STEP_FAILED"

    def __init__(self, batch: BatchProcess, index: int, cause: TextWorkbenchError, results: list[OperationResult]):
        super().__init__(
            f"Batch '{batch.name or batch.id}' stopped at step {index + 1}: {cause.message}",
            error_code=cause.error_code,
            details={"batch_id": batch.id, "step": index, **cause.details},
            user_message=cause.user_message,
        )
        self.index = index
        self.cause = cause
        self.results = results


class BatchSequencer:
    """Runs every operation of a batch in stored order."""

    def __init__(self, dispatcher: OperationDispatcher, notifier: Notifier | None = None):
        self.dispatcher = dispatcher
        self.notifier = notifier or LoggingNotifier()

    async def _run_steps(
        self, batch: BatchProcess, scope: Scope, text: str, hide_notice: bool
    ) -> tuple[str, list[OperationResult]]:
        results: list[OperationResult] = []
        for index, operation in enumerate(batch.operations):
            step_start = time.time()
            try:
                text = await self.dispatcher.apply(operation, text, scope, hide_notice=hide_notice)
            except TextWorkbenchError as e:
                results.append(
                    OperationResult(
                        index=index,
                        kind=operation.kind,
                        reference=operation.reference,
                        success=False,
                        error=e.user_message,
                        execution_time_ms=(time.time() - step_start) * 1000,
                    )
                )
                raise BatchStepError(batch, index, e, results) from e
            results.append(
                OperationResult(
                    index=index,
                    kind=operation.kind,
                    reference=operation.reference,
                    success=True,
                    execution_time_ms=(time.time() - step_start) * 1000,
                )
            )
        return text, results

    async def run(self, batch: BatchProcess, scope: Scope, initial_text: str, hide_notice: bool = True) -> str:
        """Feed ``initial_text`` through every step and return the result.

        Raises:
            SelectionRequiredError: scope is ``selection`` and the text is empty
            BatchStepError: a step failed
        """
        if scope == "selection" and not initial_text:
            raise SelectionRequiredError(f"batch:{batch.id}")
        text, _ = await self._run_steps(batch, scope, initial_text, hide_notice)
        return text

    async def apply_to_editor(self, batch: BatchProcess, scope: Scope, editor: Editor) -> BatchApplyResult:
        """Run ``batch`` on the editor and write the result back.

        Selection scope replaces only the selection; note scope replaces the
        whole document. Nothing is written when the run fails.
        """
        start_time = time.time()
        total = len(batch.operations)

        if scope == "selection" and not something_selected(editor):
            self.notifier.notify(t("NOTICE_NO_SELECTION"), False)
            return BatchApplyResult(
                batch_id=batch.id,
                scope=scope,
                success=False,
                total_operations=total,
                summary="Batch not started",
                error_summary="A selection is required",
            )

        source = editor.get_selection() if scope == "selection" else editor.get_value()
        try:
            text, results = await self._run_steps(batch, scope, source, hide_notice=True)
        except BatchStepError as e:
            log_structured_error(
                ErrorCategory.ERROR,
                e.message,
                exception=e.cause,
                context=e.details,
                operation="batch_apply",
            )
            self.notifier.notify(t("NOTICE_BATCH_FAILED", e.index + 1, e.user_message), False)
            return BatchApplyResult(
                batch_id=batch.id,
                scope=scope,
                success=False,
                total_operations=total,
                successful_operations=e.index,
                failed_operations=1,
                execution_time_ms=(time.time() - start_time) * 1000,
                operation_results=e.results,
                summary=f"Executed {e.index}/{total} operations (stopped early due to failure)",
                error_summary=e.message,
            )

        if scope == "selection":
            editor.replace_selection(text)
        else:
            editor.set_value(text)
        self.notifier.notify(t("NOTICE_BATCH_APPLIED"))

        return BatchApplyResult(
            batch_id=batch.id,
            scope=scope,
            success=True,
            text=text,
            total_operations=total,
            successful_operations=total,
            execution_time_ms=(time.time() - start_time) * 1000,
            operation_results=results,
            summary=f"Executed {total}/{total} operations successfully",
        )

    async def run_on_files(self, batch: BatchProcess, paths: Iterable[str | Path]) -> tuple[int, int]:
        """Apply ``batch`` at note scope to each file.

        Only files whose content changed are written. A failing file is
        logged and skipped.

        Returns:
            Tuple of (changed files, total files)
        """
        paths = list(paths)
        changed = 0
        for path in paths:
            try:
                document = FileEditor(path)
                document.set_value(await self.run(batch, "note", document.get_value()))
                if document.save():
                    changed += 1
            except (TextWorkbenchError, OSError, UnicodeDecodeError) as e:
                log_structured_error(
                    ErrorCategory.WARNING,
                    f"Failed to process file {path}",
                    exception=e,
                    operation="batch_run_on_files",
                    batch_id=batch.id,
                    path=str(path),
                )
        self.notifier.notify(t("NOTICE_BATCH_APPLIED_FILES", changed, len(paths)))
        return changed, len(paths)
