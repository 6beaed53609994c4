# This file makes the 'utils' directory a Python package.
from .redis_client import RedisClient
from .logger import setup_logger

__all__ = ["RedisClient", "setup_logger"]
