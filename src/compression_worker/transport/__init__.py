"""Transports carrying requests to the worker and replies back."""

from .base import Transport
from .memory import MemoryTransport
from .redis_transport import RedisTransport

__all__ = ["Transport", "MemoryTransport", "RedisTransport"]
