import sys

from lidarscene import cli
from lidarscene.utils.error_handling import capture_exceptions

capture_exceptions()

if __name__ == '__main__':
    try:
        cli.main()
    except KeyboardInterrupt:
        print('\nOperation cancelled by user')  # noqa: T201
        sys.exit(130)
