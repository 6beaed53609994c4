"""
Wire formats for the request queue and the reply channel.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


IMAGE_TRANSFORM = "compressImage"
AUDIO_TRANSFORM = "compressAudio"


class TransformRequest(BaseModel):
    """One unit of work popped from the request queue"""
    model_config = ConfigDict(populate_by_name=True)

    id: Any = Field(default=None, description="Caller-assigned correlation token, echoed verbatim")
    type: Any = Field(default=None, description="compressImage|compressAudio; anything else is an unknown kind")
    image_data: Any = Field(default=None, alias="imageData", description="Encoded image (base64) or raw RGBA pixels")
    audio_data: Any = Field(default=None, alias="audioData", description="Encoded audio bytes (base64)")
    config: Any = Field(default_factory=dict, description="Kind-specific options, validated by the pipeline")

    @property
    def kind(self) -> Any:
        return self.type


class RawPixels(BaseModel):
    """Uncompressed RGBA pixel buffer"""
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    data: Any = Field(description="width*height*4 bytes, base64 on the wire")


class TransformReply(BaseModel):
    """Reply published for a request, or for a fault with no request"""

    id: Any = Field(default=None, description="Correlation token of the originating request")
    success: bool = Field(description="Whether the transformation succeeded")
    result: Any = Field(default=None, description="Result payload on success")
    error: Optional[str] = Field(default=None, description="Human readable error on failure")

    @model_validator(mode="after")
    def _result_xor_error(self) -> "TransformReply":
        if self.success and self.error is not None:
            raise ValueError("a successful reply cannot carry an error")
        if not self.success and self.result is not None:
            raise ValueError("a failed reply cannot carry a result")
        return self

    @classmethod
    def completed(cls, request_id: Any, result: Any) -> "TransformReply":
        return cls(id=request_id, success=True, result=result)

    @classmethod
    def failed(cls, request_id: Any, error: str) -> "TransformReply":
        return cls(id=request_id, success=False, error=error)

    @classmethod
    def fault(cls, error: str) -> "TransformReply":
        return cls(success=False, error=error)

    @property
    def correlated(self) -> bool:
        return "id" in self.model_fields_set

    def to_message(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {}
        if self.correlated:
            message["id"] = self.id
        message["success"] = self.success
        if self.success:
            message["result"] = self.result
        else:
            message["error"] = self.error
        return message


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single readable line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or str(exc)
