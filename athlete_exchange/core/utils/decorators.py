"""
Utility decorators for operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any

from loguru import logger

_CONTEXT_PARAMS = ("user_id", "instrument_id", "direction", "share_count", "username", "limit")


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    elif hasattr(value, "quantize"):
        return str(value)  # Handle Decimal types
    else:
        return value


def _extract_operation_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract exchange context from function arguments."""
    return {
        name: _serialize_parameter_value(value)
        for name, value in bound_args.arguments.items()
        if name in _CONTEXT_PARAMS
    }


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Build the logging context for one call."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_operation_context(bound_args),
    }


def _describe_result(result: Any) -> dict[str, Any]:
    """Summarize a result for the success log line."""
    context: dict[str, Any] = {"result_type": type(result).__name__}
    ok = getattr(result, "ok", None)
    if isinstance(ok, bool):
        context["ok"] = ok
        error = getattr(result, "error", None)
        if error is not None:
            context["error_code"] = getattr(error, "code", type(error).__name__)
    elif isinstance(result, list):
        context["count"] = len(result)
    return context


def log_operation[F: Callable[..., Any]](func: F) -> F:
    """Decorator to log exchange operations with correlation IDs."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        func_name = func.__name__
        bound = logger.bind(**context)

        bound.debug(f"Exchange operation started: {func_name}")
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
            bound.bind(execution_time_ms=elapsed_ms, error_type=type(e).__name__).error(
                f"Exchange operation failed: {func_name}: {e}"
            )
            raise

        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        bound.bind(execution_time_ms=elapsed_ms, **_describe_result(result)).debug(
            f"Exchange operation completed: {func_name}"
        )
        return result

    return wrapper  # type: ignore
