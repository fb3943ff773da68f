from typing import Any


class LidarSceneError(Exception):
    """Base exception for all lidarscene-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ', '.join(f'{k}={v}' for k, v in self.details.items())
            return f'{self.message} [{details_str}]'
        return self.message


class ConfigError(LidarSceneError):
    """Raised when the generator settings are invalid."""

    def __init__(self, message: str, errors: list[str] | None = None, **kwargs: Any):
        details = kwargs.copy()
        if errors:
            details['errors'] = errors
        super().__init__(message, details)


class FileError(LidarSceneError):
    """Raised when there's an issue with the output files."""

    def __init__(self, message: str, file_path: str | None = None, **kwargs: Any):
        details = kwargs.copy()
        if file_path:
            details['file_path'] = file_path
        super().__init__(message, details)
