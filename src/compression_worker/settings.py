from __future__ import annotations

"""Runtime configuration helpers for the compression worker."""

import os
from dataclasses import dataclass

_BOOL_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _BOOL_TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class RedisSettings:
    host: str
    port: int
    db: int
    password: str | None


@dataclass(frozen=True)
class WorkerSettings:
    request_queue: str
    reply_channel: str
    poll_timeout: float
    max_concurrency: int


@dataclass(frozen=True)
class AudioSettings:
    preserve_duration: bool


@dataclass(frozen=True)
class ClientSettings:
    timeout_seconds: float


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    format: str
    file: str | None


@dataclass(frozen=True)
class Settings:
    redis: RedisSettings
    worker: WorkerSettings
    audio: AudioSettings
    client: ClientSettings
    logging: LoggingSettings


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""

    redis_settings = RedisSettings(
        host=os.getenv("REDIS_HOST", "localhost"),
        port=_env_int("REDIS_PORT", 6379),
        db=_env_int("REDIS_DB", 0),
        password=os.getenv("REDIS_PASSWORD"),
    )

    worker_settings = WorkerSettings(
        request_queue=os.getenv("COMPRESSION_REQUEST_QUEUE", "compression_requests"),
        reply_channel=os.getenv("COMPRESSION_REPLY_CHANNEL", "compression_replies"),
        poll_timeout=_env_float("WORKER_POLL_TIMEOUT", 1.0),
        max_concurrency=_env_int("WORKER_MAX_CONCURRENCY", 0),
    )

    audio_settings = AudioSettings(
        preserve_duration=_env_bool("AUDIO_PRESERVE_DURATION", True),
    )

    client_settings = ClientSettings(
        timeout_seconds=_env_float("CLIENT_TIMEOUT_SECONDS", 30.0),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        file=os.getenv("LOG_FILE"),
    )

    return Settings(
        redis=redis_settings,
        worker=worker_settings,
        audio=audio_settings,
        client=client_settings,
        logging=logging_settings,
    )


__all__ = [
    "Settings",
    "RedisSettings",
    "WorkerSettings",
    "AudioSettings",
    "ClientSettings",
    "LoggingSettings",
    "load_settings",
]
