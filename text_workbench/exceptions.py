"""Exception hierarchy for the text workbench.

Every failure that can reach a caller is a ``TextWorkbenchError`` carrying a
stable ``error_code``, a ``details`` dict for logging, and a short
``user_message`` suitable for a notice.
"""

from __future__ import annotations

from typing import Any


class TextWorkbenchError(Exception):
    """Base class for all text workbench errors."""

    default_code = "UNKNOWN_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.user_message = user_message or message

    def to_dict(self) -> dict[str, Any]:
        """Convert the error into a serializable dict."""
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }


class ValidationError(TextWorkbenchError):
    """Invalid input supplied to an operation."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = value
        super().__init__(message, details=details, **kwargs)


class PatternError(TextWorkbenchError):
    """A user-supplied pattern failed to compile."""

    default_code = "MALFORMED_PATTERN"

    def __init__(self, pattern: str, reason: str, tool_id: str | None = None):
        details = {"pattern": pattern, "reason": reason}
        if tool_id:
            details["tool_id"] = tool_id
        super().__init__(
            f"Invalid pattern {pattern!r}: {reason}",
            details=details,
            user_message=f"Invalid regular expression: {reason}",
        )


class ReferenceNotFoundError(TextWorkbenchError):
    """A batch step or command references something that no longer exists."""

    default_code = "REFERENCE_NOT_FOUND"
    kind = "reference"

    def __init__(self, reference_id: str, details: dict[str, Any] | None = None):
        merged = {f"{self.kind}_id": reference_id}
        if details:
            merged.update(details)
        super().__init__(
            f"{self.kind.capitalize()} '{reference_id}' not found",
            details=merged,
            user_message=f"{self.kind.capitalize()} '{reference_id}' does not exist",
        )
        self.reference_id = reference_id


class ToolNotFoundError(ReferenceNotFoundError):
    default_code = "TOOL_NOT_FOUND"
    kind = "tool"


class ScriptNotFoundError(ReferenceNotFoundError):
    default_code = "SCRIPT_NOT_FOUND"
    kind = "script"


class ActionNotFoundError(ReferenceNotFoundError):
    default_code = "PROMPT_NOT_FOUND"
    kind = "action"


class BatchNotFoundError(ReferenceNotFoundError):
    default_code = "BATCH_NOT_FOUND"
    kind = "batch"


class ScriptExecutionError(TextWorkbenchError):
    """User script raised during construction or execution."""

    default_code = "SCRIPT_EXECUTION_ERROR"

    def __init__(self, script_name: str, original_error: BaseException):
        super().__init__(
            f"Script '{script_name}' failed: {type(original_error).__name__}: {original_error}",
            details={
                "script_name": script_name,
                "original_error": str(original_error),
                "original_type": type(original_error).__name__,
            },
            user_message=f"Script error: {original_error}",
        )
        self.script_name = script_name
        self.original_error = original_error


class AIConfigurationError(TextWorkbenchError):
    """AI credentials, endpoint or model are missing."""

    default_code = "AI_CONFIG_INCOMPLETE"

    def __init__(self, missing: list[str]):
        super().__init__(
            f"AI configuration incomplete, missing: {', '.join(missing)}",
            details={"missing_fields": missing},
            user_message="AI configuration is incomplete. Set the API key, URL and model.",
        )


class AITransportError(TextWorkbenchError):
    """The AI request failed or returned an unusable response."""

    default_code = "AI_TRANSPORT_ERROR"

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(f"AI request failed: {reason}", details=details, user_message=reason)


class SelectionRequiredError(TextWorkbenchError):
    """An operation needs a non-empty selection and none is present."""

    default_code = "NO_SELECTION"

    def __init__(self, operation: str):
        super().__init__(
            f"Operation '{operation}' requires a selection",
            details={"operation": operation},
            user_message="Select some text first",
        )
