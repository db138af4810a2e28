"""Result models for batch execution.

Operations and batches themselves live in ``text_workbench.models.operations``;
this module only describes what a run produced.
"""

import time

from pydantic import BaseModel
from pydantic import Field

from ..models.operations import Scope


class OperationResult(BaseModel):
    """Result of executing a single batch step."""

    index: int = Field(..., description="Position of the step in the batch")
    kind: str = Field(..., description="Operation kind")
    reference: str = Field(..., description="Tool, script or action id")
    success: bool = Field(..., description="Whether the step completed")
    error: str | None = Field(default=None, description="Error message if failed")
    execution_time_ms: float = Field(default=0.0, description="Execution time in milliseconds")
    timestamp: str = Field(default_factory=lambda: time.strftime("%Y-%m-%d %H:%M:%S"))


class BatchApplyResult(BaseModel):
    """Complete result of running a batch against an editor.

    ``text`` is only set when the editor was written.
    """

    batch_id: str
    scope: Scope
    success: bool = Field(..., description="Overall batch success")
    text: str | None = Field(default=None, description="Final text written back to the editor")
    total_operations: int = Field(default=0, description="Total number of operations")
    successful_operations: int = Field(default=0, description="Number of successful operations")
    failed_operations: int = Field(default=0, description="Number of failed operations")
    execution_time_ms: float = Field(default=0.0, description="Total execution time")
    operation_results: list[OperationResult] = Field(default_factory=list)
    summary: str = Field(default="", description="Human-readable execution summary")
    error_summary: str | None = Field(default=None, description="Error summary if batch failed")
