"""
Shared fixtures for the compression worker tests.
"""
import io
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest
import soundfile as sf
from PIL import Image

from compression_worker.transport.memory import MemoryTransport


@pytest.fixture
def memory_transport():
    """In-process transport shared by worker and caller"""
    return MemoryTransport()


@pytest.fixture
def make_png():
    """Factory for encoded PNG bytes of a given size"""
    def _make(width: int = 200, height: int = 150, mode: str = "RGB") -> bytes:
        color = (200, 30, 30) if mode == "RGB" else (200, 30, 30, 255)
        image = Image.new(mode, (width, height), color)
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()
    return _make


@pytest.fixture
def make_wav():
    """Factory for float WAV bytes; samples are shaped (frames, channels)"""
    def _make(samples: np.ndarray, sample_rate: int) -> bytes:
        buf = io.BytesIO()
        sf.write(buf, np.asarray(samples, dtype=np.float32), sample_rate, format="WAV", subtype="FLOAT")
        return buf.getvalue()
    return _make


@pytest.fixture
def stereo_tone():
    """800 frames of a stereo ramp/tone pair at 8 kHz"""
    frames = 800
    t = np.arange(frames, dtype=np.float32) / 8000.0
    left = np.sin(2 * np.pi * 440.0 * t).astype(np.float32) * 0.5
    right = np.linspace(-0.5, 0.5, frames, dtype=np.float32)
    return np.stack([left, right], axis=1), 8000


@pytest.fixture
def mock_redis_client():
    """Mocked RedisClient wrapper"""
    client = MagicMock()
    client.publish = AsyncMock(return_value=1)
    client.rpush = AsyncMock(return_value=1)
    client.blpop = AsyncMock(return_value=None)
    client.close = AsyncMock()
    return client


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
