import pytest
from pydantic import ValidationError

from compression_worker.models.config import AudioConfig, ImageConfig
from compression_worker.models.messages import TransformReply, TransformRequest


def test_request_reads_wire_aliases():
    request = TransformRequest.model_validate(
        {"id": {"nested": 1}, "type": "compressAudio", "audioData": "AAAA", "config": {"channels": 1}}
    )

    assert request.id == {"nested": 1}
    assert request.kind == "compressAudio"
    assert request.audio_data == "AAAA"
    assert request.image_data is None


def test_request_envelope_leaves_type_and_config_unchecked():
    request = TransformRequest.model_validate({"id": "r2", "type": 5, "config": None})

    assert request.kind == 5
    assert request.config is None
    assert TransformRequest.model_validate({}).config == {}


def test_reply_shapes():
    assert TransformReply.completed("r1", {"a": 1}).to_message() == {"id": "r1", "success": True, "result": {"a": 1}}
    assert TransformReply.failed("r1", "nope").to_message() == {"id": "r1", "success": False, "error": "nope"}
    assert TransformReply.fault("crash").to_message() == {"success": False, "error": "crash"}


def test_reply_never_carries_result_and_error():
    with pytest.raises(ValidationError):
        TransformReply(id="r1", success=True, result={}, error="x")
    with pytest.raises(ValidationError):
        TransformReply(id="r1", success=False, result={}, error="x")


@pytest.mark.parametrize(
    "value,expected",
    [("jpeg", "jpeg"), ("JPG", "jpeg"), ("image/png", "png"), ("WebP", "webp"), ("avif", "avif")],
)
def test_image_format_normalization(value, expected):
    assert ImageConfig(format=value, quality=0.5).format == expected


@pytest.mark.parametrize("level,value", [("low", 0.3), ("medium", 0.6), ("high", 0.8), ("ultra", 0.95), ("lossless", 1.0)])
def test_quality_levels(level, value):
    assert ImageConfig(format="jpeg", quality=level).quality == value


def test_image_config_rejects_non_positive_bounds():
    with pytest.raises(ValidationError):
        ImageConfig.model_validate({"maxWidth": 0, "format": "png", "quality": 1.0})


def test_image_config_is_frozen():
    config = ImageConfig(format="png", quality=1.0)

    with pytest.raises(ValidationError):
        config.quality = 0.5


def test_audio_preset_fills_only_missing_values():
    config = AudioConfig.model_validate({"preset": "High", "channels": 1})

    assert config.sample_rate == 48000
    assert config.channels == 1
    assert config.preset == "high"


def test_audio_unknown_preset():
    with pytest.raises(ValidationError):
        AudioConfig.model_validate({"preset": "studio"})


def test_audio_config_requires_values_without_preset():
    with pytest.raises(ValidationError):
        AudioConfig.model_validate({"sampleRate": 8000})
