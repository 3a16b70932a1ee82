import functools
import time
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from opentelemetry.trace import SpanKind, Status, StatusCode

from tablespec.telemetry import get_tracer


F = TypeVar('F', bound=Callable[..., Any])
T = TypeVar('T')

logger = None


def _get_logger():
    """Get logger instance lazily."""
    global logger
    if logger is None:
        from tablespec.logging import get_logger
        logger = get_logger(__name__)
    return logger


def traced(
    span_name: Optional[str] = None,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    attribute_getter: Optional[Callable[..., Optional[Dict[str, Any]]]] = None,
) -> Callable[[F], F]:
    """Instrument a function with an OpenTelemetry span.

    Args:
        span_name: Optional explicit span name. Defaults to module-qualified function name.
        kind: Span kind, defaults to INTERNAL.
        attributes: Static span attributes to attach.
        attribute_getter: Callable returning additional attributes at call time.
    """

    def decorator(func: F) -> F:

        def _collect_attributes(args: tuple, kwargs: dict) -> Dict[str, Any]:
            collected: Dict[str, Any] = {}
            if attributes:
                collected.update({k: v for k, v in attributes.items() if v is not None})

            if attribute_getter:
                dynamic_attrs = attribute_getter(*args, **kwargs)
                if dynamic_attrs:
                    collected.update({k: v for k, v in dynamic_attrs.items() if v is not None})

            return collected

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)
            name = span_name or f"{func.__module__}.{func.__qualname__}"

            with tracer.start_as_current_span(name, kind=kind) as span:
                for key, value in _collect_attributes(args, kwargs).items():
                    span.set_attribute(key, value)

                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator


def retry_with_backoff(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    retry_on: Optional[Tuple[Type[Exception], ...]] = None,
    retry_condition: Optional[Callable[[Exception], bool]] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for retrying operations with exponential backoff.

    The delay between retries follows
    ``delay = min(initial_delay * (exponential_base ** attempt), max_delay)``.

    Args:
        max_retries: Maximum number of retry attempts. Default is 3.
        initial_delay: Initial delay in seconds between retries. Default is 1.0.
        max_delay: Maximum delay in seconds (caps exponential growth). Default is 60.0.
        exponential_base: Base for exponential backoff calculation. Default is 2.0.
        retry_on: Tuple of exception types to retry on. If None, retries on all
            exceptions.
        retry_condition: Optional function that takes an exception and returns True
            if the operation should be retried.

    Raises:
        The last exception encountered if all retry attempts fail.

    Example:
        >>> @retry_with_backoff(max_retries=5, retry_on=(OperationalError,))
        >>> def write_rows():
        ...     return engine.execute_many(sql, rows)

    Notes:
        - Retry attempts are logged at WARNING level
        - Final failure is logged at ERROR level
        - Total attempts = max_retries + 1 (initial attempt + retries)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    should_retry = retry_on is None or isinstance(e, retry_on)

                    if should_retry and retry_condition:
                        should_retry = retry_condition(e)

                    if should_retry and attempt < max_retries:
                        _get_logger().warning(
                            f"Attempt {attempt + 1} failed for {func.__name__}: {e}. "
                            f"Retrying in {delay} seconds..."
                        )
                        time.sleep(delay)
                        delay = min(delay * exponential_base, max_delay)
                    else:
                        if should_retry:
                            _get_logger().error(
                                f"All {max_retries + 1} attempts failed for {func.__name__}"
                            )
                        raise

            raise RuntimeError("unreachable")  # pragma: no cover

        return wrapper

    return decorator
