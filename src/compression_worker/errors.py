from __future__ import annotations


class CompressionWorkerError(Exception):
    """Base error for the compression worker."""


class ImageCompressionError(CompressionWorkerError):
    """Raised when any step of the image pipeline fails."""


class AudioCompressionError(CompressionWorkerError):
    """Raised when any step of the audio pipeline fails."""


class UnknownTransformKind(CompressionWorkerError):
    """Raised when a request names a compression type with no pipeline."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown compression type: {kind}")
        self.kind = kind


class UncaughtFault(CompressionWorkerError):
    """A fault outside any request, reported without a correlation id."""


class UnhandledAsyncRejection(CompressionWorkerError):
    """An exception nobody awaited, reported without a correlation id."""


class MessageSerializationError(CompressionWorkerError):
    """Raised when a transport payload cannot be encoded or decoded."""


class CompressionTimeoutError(CompressionWorkerError, TimeoutError):
    """Raised by the client when no reply arrives in time."""
