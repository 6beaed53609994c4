from compression_worker.settings import load_settings


def test_defaults(monkeypatch):
    for name in ("REDIS_HOST", "REDIS_PORT", "WORKER_MAX_CONCURRENCY", "AUDIO_PRESERVE_DURATION", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.redis.host == "localhost"
    assert settings.redis.port == 6379
    assert settings.worker.request_queue == "compression_requests"
    assert settings.worker.reply_channel == "compression_replies"
    assert settings.worker.max_concurrency == 0
    assert settings.audio.preserve_duration is True
    assert settings.client.timeout_seconds == 30.0
    assert settings.logging.file is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REDIS_HOST", "redis")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("COMPRESSION_REQUEST_QUEUE", "jobs")
    monkeypatch.setenv("WORKER_POLL_TIMEOUT", "0.25")
    monkeypatch.setenv("AUDIO_PRESERVE_DURATION", "no")

    settings = load_settings()

    assert settings.redis.host == "redis"
    assert settings.redis.port == 6380
    assert settings.worker.request_queue == "jobs"
    assert settings.worker.poll_timeout == 0.25
    assert settings.audio.preserve_duration is False


def test_bad_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("REDIS_PORT", "not-a-port")
    monkeypatch.setenv("CLIENT_TIMEOUT_SECONDS", "soon")

    settings = load_settings()

    assert settings.redis.port == 6379
    assert settings.client.timeout_seconds == 30.0
