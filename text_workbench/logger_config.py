import functools
import inspect
import json
import logging
import traceback
from datetime import datetime
from datetime import timezone
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class ErrorCategory(Enum):
    """Severity buckets used by structured error logging."""

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_CATEGORY_LEVELS = {
    ErrorCategory.CRITICAL: logging.CRITICAL,
    ErrorCategory.ERROR: logging.ERROR,
    ErrorCategory.WARNING: logging.WARNING,
    ErrorCategory.INFO: logging.INFO,
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class StructuredLogFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            log_data[key] = value
        return json.dumps(log_data, default=str, ensure_ascii=False)


# --- Logging Setup ---
operation_logger = logging.getLogger("text_workbench.operations")
error_logger = logging.getLogger("text_workbench.errors")

_configured = False


def configure_logging(settings=None) -> None:
    """Attach handlers to the package loggers.

    Safe to call more than once; handlers are only installed the first time.
    """
    global _configured
    if _configured:
        return
    if settings is None:
        from .config import get_settings

        settings = get_settings()

    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    if settings.structured_logging:
        formatter: logging.Formatter = StructuredLogFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    package_logger = logging.getLogger("text_workbench")
    package_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        # 10MB per file, 5 backups
        file_handler = RotatingFileHandler(log_path, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.propagate = False
    _configured = True


def log_structured_error(
    category: ErrorCategory,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    operation: str | None = None,
    **fields: Any,
) -> None:
    """Log an error with a category and flattened context fields."""
    extra: dict[str, Any] = {"error_category": category.value}
    if operation:
        extra["operation"] = operation
    if context:
        extra.update(context)
    extra.update(fields)
    if exception is not None:
        extra["error_type"] = type(exception).__name__
    error_logger.log(
        _CATEGORY_LEVELS[category],
        message,
        extra=extra,
        exc_info=exception is not None,
    )


def safe_operation(
    operation_name: str,
    operation_func,
    *args,
    error_category: ErrorCategory = ErrorCategory.ERROR,
    context: dict[str, Any] | None = None,
    **kwargs,
) -> tuple[bool, Any, str | None]:
    """Run ``operation_func`` and report failure instead of raising.

    Returns:
        Tuple of (success, result, error message)
    """
    try:
        result = operation_func(*args, **kwargs)
        return True, result, None
    except Exception as e:
        log_structured_error(
            category=error_category,
            message=f"Operation {operation_name} failed: {e}",
            exception=e,
            context=context,
            operation=operation_name,
        )
        return False, None, str(e)


def _describe(value: Any) -> str:
    if hasattr(value, "model_dump_json"):
        return value.model_dump_json(exclude_none=True)
    text = repr(value)
    if len(text) > 200:
        text = text[:200] + f"...<{len(text)} chars>"
    return text


# --- Decorator for logging tool calls ---
def log_tool_call(func):
    """Log entry, result size and failures of a sync or async callable."""
    func_name = getattr(func, "__qualname__", getattr(func, "__name__", "unknown_function"))

    def _log_call(args, kwargs):
        try:
            logged_args = [_describe(a) for a in args]
            logged_kwargs = {k: _describe(v) for k, v in kwargs.items()}
            arg_str = f"args={logged_args}, kwargs={logged_kwargs}"
        except Exception as e:
            arg_str = f"args/kwargs logging error: {e}"
        operation_logger.debug(f"Calling {func_name} with {arg_str}")

    def _log_result(result):
        size = len(result) if isinstance(result, str) else None
        operation_logger.debug(f"{func_name} returned", extra={"operation": func_name, "result_size": size})

    def _log_failure(e):
        operation_logger.error(f"{func_name} raised exception: {e}", exc_info=True)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            _log_call(args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_failure(e)
                raise
            _log_result(result)
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        _log_call(args, kwargs)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _log_failure(e)
            raise
        _log_result(result)
        return result

    return wrapper
