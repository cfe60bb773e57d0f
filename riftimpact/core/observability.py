"""Observability helpers for riftimpact.

Provides structlog configuration bridged onto stdlib logging and the
``traced`` decorator used on adapter and service entry points.
"""

import functools
import inspect
import logging
import re
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

logger = structlog.get_logger("riftimpact.trace")

F = TypeVar("F", bound=Callable[..., Any])

# Sensitive data redaction pattern
_SENSITIVE_KEY_RE = re.compile(
    r"(token|key|secret|password|authorization|auth)", re.IGNORECASE
)

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json_output: bool | None = None) -> None:
    """Route structlog and stdlib logging through one formatter.

    Args:
        level: Root log level name.
        json_output: Render JSON lines; defaults to JSON when stderr is not a TTY.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    # aiohttp access/client chatter is noise at INFO
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _serialize_value(value: Any, max_length: int) -> Any:
    """Compact, log-safe representation of an argument or result."""
    if isinstance(value, str | int | float | bool) or value is None:
        if isinstance(value, str) and len(value) > max_length:
            return value[:max_length] + "..."
        return value
    text = repr(value)
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _capture_kwargs(kwargs: dict[str, Any], max_length: int) -> dict[str, Any]:
    return {
        k: _mask_scalar(v) if _SENSITIVE_KEY_RE.search(k) else _serialize_value(v, max_length)
        for k, v in kwargs.items()
    }


def traced(
    *,
    capture_args: bool = True,
    capture_result: bool = False,
    max_arg_length: int = 200,
    log_level: str = "DEBUG",
    layer: str | None = None,
) -> Callable[[F], F]:
    """Decorator for function tracing.

    Logs entry, exit and duration, and on failure the exception type and
    message before re-raising. Works for sync and async callables.

    Args:
        capture_args: Log positional/keyword arguments (sensitive kwargs masked)
        capture_result: Log a truncated repr of the return value
        max_arg_length: Maximum length for serialized values
        log_level: Level for entry/exit records
        layer: Optional tag (e.g. "adapter", "service") added to every record
    """
    level = logging.getLevelNamesMapping()[log_level.upper()]

    def decorator(func: F) -> F:
        name = f"{func.__module__}.{func.__qualname__}"
        params = list(inspect.signature(func).parameters)
        is_method = bool(params) and params[0] in ("self", "cls")

        def _start() -> tuple[str, dict[str, Any]]:
            execution_id = f"{func.__name__}_{time.time_ns()}"
            bind_contextvars(execution_id=execution_id)
            fields: dict[str, Any] = {"function": name}
            if layer:
                fields["layer"] = layer
            return execution_id, fields

        def _log_entry(
            fields: dict[str, Any], args: tuple[Any, ...], kwargs: dict[str, Any]
        ) -> None:
            if capture_args:
                shown = args[1:] if is_method else args
                logger.log(
                    level,
                    "call.start",
                    args=[_serialize_value(a, max_arg_length) for a in shown],
                    kwargs=_capture_kwargs(kwargs, max_arg_length),
                    **fields,
                )
            else:
                logger.log(level, "call.start", **fields)

        def _log_success(fields: dict[str, Any], started: float, result: Any) -> None:
            extra = {"result": _serialize_value(result, max_arg_length)} if capture_result else {}
            logger.log(
                level,
                "call.end",
                duration_ms=round((time.perf_counter() - started) * 1000, 3),
                **extra,
                **fields,
            )

        def _log_failure(fields: dict[str, Any], started: float, exc: Exception) -> None:
            logger.warning(
                "call.error",
                duration_ms=round((time.perf_counter() - started) * 1000, 3),
                error_type=type(exc).__name__,
                error_message=str(exc),
                **fields,
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                _, fields = _start()
                _log_entry(fields, args, kwargs)
                started = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    _log_failure(fields, started, exc)
                    raise
                finally:
                    unbind_contextvars("execution_id")
                _log_success(fields, started, result)
                return result

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            _, fields = _start()
            _log_entry(fields, args, kwargs)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _log_failure(fields, started, exc)
                raise
            finally:
                unbind_contextvars("execution_id")
            _log_success(fields, started, result)
            return result

        return cast(F, sync_wrapper)

    return decorator


# Convenience decorators with common configurations
def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return traced(capture_args=True, log_level="DEBUG", layer="adapter")(func)


def trace_service(func: F) -> F:
    """Decorator for service entry points."""
    return traced(capture_args=True, log_level="INFO", layer="service")(func)
