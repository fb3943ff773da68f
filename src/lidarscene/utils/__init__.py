from lidarscene.utils.error_handling import capture_exceptions, handle_errors
from lidarscene.utils.exceptions import ConfigError, FileError, LidarSceneError
from lidarscene.utils.logging import LogLevel, failure_log, setup_logging
from lidarscene.utils.quaternion import Quaternion

__all__ = [
    'LidarSceneError',
    'ConfigError',
    'FileError',
    'LogLevel',
    'setup_logging',
    'failure_log',
    'handle_errors',
    'capture_exceptions',
    'Quaternion',
]
