import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar, cast

from lidarscene.utils.exceptions import LidarSceneError

F = TypeVar('F', bound=Callable[..., Any])


def handle_errors(
    logger: logging.Logger | None = None,
    *,
    exit_on_error: bool = False,
    exit_code: int = 1,
    show_traceback: bool = False,
    expected_exceptions: list[type[Exception]] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to report expected errors without a traceback.

    Expected exceptions are logged as errors, anything else is logged as critical
    with its traceback. Both are re-raised unless `exit_on_error` is set, in which
    case the process exits with `exit_code`.

    Args:
        logger: The logger to use for error messages
        exit_on_error: Whether to exit the program on error
        exit_code: The exit code to use when exiting
        show_traceback: Whether to show the full traceback for expected errors
        expected_exceptions: Exception types that are reported as plain errors

    Returns:
        A decorator function
    """
    expected = tuple(expected_exceptions or [LidarSceneError])

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)

            try:
                return func(*args, **kwargs)
            except expected as e:
                log.error('Error in %s: %s', func.__name__, e, exc_info=show_traceback)
                if exit_on_error:
                    sys.exit(exit_code)
                raise
            except Exception as e:
                log.critical('Unexpected error in %s: %s', func.__name__, e, exc_info=True)
                if exit_on_error:
                    sys.exit(exit_code)
                raise

        return cast(F, wrapper)

    return decorator


def capture_exceptions(file_path: str | Path | None = None) -> None:
    """
    Set up global exception handling to capture uncaught exceptions.

    Args:
        file_path: Optional path to write exceptions to (in addition to logging)
    """
    logger = logging.getLogger(__name__)

    def exception_handler(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical('Uncaught exception', exc_info=(exc_type, exc_value, exc_traceback))

        if file_path:
            path = Path(file_path)
            path.parent.mkdir(parents=True, exist_ok=True)

            with path.open('a') as f:
                f.write(f'\n{"=" * 80}\n')
                f.write(f'UNCAUGHT EXCEPTION: {exc_value}\n')
                if exc_traceback:
                    traceback.print_exception(exc_type, exc_value, exc_traceback, file=f)

    sys.excepthook = exception_handler
