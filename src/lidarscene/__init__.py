"""Random LIDAR renderer scenarios with recorded ground truth poses."""

__version__ = '1.0.0'
