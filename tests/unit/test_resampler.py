import numpy as np
import pytest

from compression_worker.audio.resampler import resample, resampled_length
from compression_worker.audio.types import AudioBuffer


def _buffer(channels, rate):
    return AudioBuffer(samples=np.asarray(channels, dtype=np.float32), sample_rate=rate)


def test_equal_rates_copy_samples_verbatim():
    source = _buffer([[0.1, -0.2, 0.3, 0.9], [0.0, 0.5, -0.5, 1.0]], 44100)

    out = resample(source, 44100, 2)

    assert out.sample_rate == 44100
    np.testing.assert_array_equal(out.samples, source.samples)


def test_extra_target_channels_are_silent():
    source = _buffer([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]], 8000)

    out = resample(source, 8000, 4)

    assert out.channels == 4
    np.testing.assert_array_equal(out.samples[:2], source.samples)
    assert not out.samples[2:].any()


def test_channels_are_capped_to_target():
    source = _buffer([[0.1, 0.2], [0.4, 0.5], [0.7, 0.8]], 8000)

    out = resample(source, 8000, 1)

    assert out.channels == 1
    np.testing.assert_array_equal(out.samples[0], source.samples[0])


def test_upsampling_interpolates_linearly():
    source = _buffer([[0.0, 1.0]], 2)

    out = resample(source, 4, 1)

    assert out.length == 4
    np.testing.assert_allclose(out.samples[0], [0.0, 0.5, 1.0, 1.0])


def test_downsampling_preserves_duration():
    source = _buffer([[0.0, 1.0, 2.0, 3.0]], 4)

    out = resample(source, 2, 1)

    assert out.length == 2
    assert out.duration == pytest.approx(source.duration)
    np.testing.assert_allclose(out.samples[0], [0.0, 2.0])


def test_sample_count_mode_keeps_length_and_holds_last_sample():
    source = _buffer([[0.0, 1.0, 2.0, 3.0]], 4)

    out = resample(source, 2, 1, preserve_duration=False)

    assert out.length == 4
    np.testing.assert_allclose(out.samples[0], [0.0, 2.0, 3.0, 3.0])


def test_no_clipping_after_interpolation():
    source = _buffer([[1.5, -1.5]], 1)

    out = resample(source, 2, 1)

    np.testing.assert_allclose(out.samples[0], [1.5, 0.0, -1.5, -1.5])


def test_empty_source_channel_yields_empty_output():
    out = resample(AudioBuffer.silence(1, 0, 8000), 16000, 2)

    assert out.length == 0
    assert out.channels == 2


def test_resampled_length():
    assert resampled_length(1000, 44100, 22050) == 500
    assert resampled_length(1000, 44100, 22050, preserve_duration=False) == 1000
    assert resampled_length(441, 44100, 48000) == 480


def test_invalid_target_rate():
    with pytest.raises(ValueError):
        resample(AudioBuffer.silence(1, 4, 8000), 0, 1)
