"""Background image/audio compression worker driven by a request/reply protocol."""

from .client import CompressionClient
from .dispatcher import RequestDispatcher
from .errors import (
    AudioCompressionError,
    CompressionTimeoutError,
    CompressionWorkerError,
    ImageCompressionError,
    MessageSerializationError,
    UncaughtFault,
    UnhandledAsyncRejection,
    UnknownTransformKind,
)
from .faults import FaultReporter
from .service import CompressionService
from .settings import Settings, load_settings

__all__ = [
    "CompressionClient",
    "RequestDispatcher",
    "AudioCompressionError",
    "CompressionTimeoutError",
    "CompressionWorkerError",
    "ImageCompressionError",
    "MessageSerializationError",
    "UncaughtFault",
    "UnhandledAsyncRejection",
    "UnknownTransformKind",
    "FaultReporter",
    "CompressionService",
    "Settings",
    "load_settings",
]
