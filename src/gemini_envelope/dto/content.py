"""Content DTOs: parts and the content blocks that hold them.

``Part`` and ``Content`` are generic over the expected text type ``T``,
which defaults to ``str``. ``Content[Person]`` decodes every part's text
into a ``Person`` while it is being validated.

Public API (the "studs"):
    Role: Author of a content block
    MimeType: Media types accepted for inline and file data
    Blob, FunctionCall, FunctionResponse, FileData, ExecutableCode,
    CodeExecutionResult, VideoMetadata: Non-text part payloads
    Part: A single part holding one payload
    Content: An ordered sequence of parts with an optional role
"""

import base64
from enum import Enum
from typing import Any, Generic

from pydantic import Field

from .text import T, TypedText
from .wire import WireModel


class Role(str, Enum):
    """Author of a content block."""

    USER = "user"
    MODEL = "model"


class MimeType(str, Enum):
    """Media types the API accepts for inline and file data."""

    # Image formats
    IMAGE_PNG = "image/png"
    IMAGE_JPEG = "image/jpeg"
    IMAGE_WEBP = "image/webp"
    IMAGE_HEIC = "image/heic"
    IMAGE_HEIF = "image/heif"

    # Audio formats
    AUDIO_WAV = "audio/wav"
    AUDIO_MP3 = "audio/mp3"
    AUDIO_MPEG = "audio/mpeg"
    AUDIO_AIFF = "audio/aiff"
    AUDIO_AAC = "audio/aac"
    AUDIO_OGG = "audio/ogg"
    AUDIO_FLAC = "audio/flac"

    # Video formats
    VIDEO_MP4 = "video/mp4"
    VIDEO_MPEG = "video/mpeg"
    VIDEO_MOV = "video/mov"
    VIDEO_AVI = "video/avi"
    VIDEO_FLV = "video/x-flv"
    VIDEO_MPG = "video/mpg"
    VIDEO_WEBM = "video/webm"
    VIDEO_WMV = "video/wmv"
    VIDEO_3GPP = "video/3gpp"

    # Document formats
    APPLICATION_PDF = "application/pdf"
    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"
    TEXT_CSS = "text/css"
    TEXT_JAVASCRIPT = "text/javascript"
    APPLICATION_JAVASCRIPT = "application/x-javascript"
    TEXT_TYPESCRIPT = "text/x-typescript"
    APPLICATION_TYPESCRIPT = "application/x-typescript"
    TEXT_CSV = "text/csv"
    TEXT_MARKDOWN = "text/markdown"
    TEXT_PYTHON = "text/x-python"
    APPLICATION_PYTHON_CODE = "application/x-python-code"
    APPLICATION_JSON = "application/json"
    TEXT_XML = "text/xml"
    APPLICATION_RTF = "application/rtf"
    TEXT_RTF = "text/rtf"


class Blob(WireModel):
    """Inline media bytes, base64-encoded."""

    mime_type: MimeType | str = Field(
        ..., union_mode="left_to_right", description="IANA media type of the data"
    )
    data: str = Field(..., description="Base64-encoded bytes")

    def decode(self) -> bytes:
        """Return the raw bytes."""
        return base64.b64decode(self.data)


class FunctionCall(WireModel):
    """A function call predicted by the model."""

    name: str = Field(..., description="Name of the function to call")
    args: dict[str, Any] | None = Field(None, description="Arguments as a JSON object")


class FunctionResponse(WireModel):
    """The result of a function call."""

    name: str = Field(..., description="Name of the function that was called")
    response: Any = Field(..., description="Result as a JSON object")


class FileData(WireModel):
    """URI based data."""

    mime_type: MimeType | str | None = Field(
        None, union_mode="left_to_right", description="IANA media type of the file"
    )
    file_uri: str = Field(..., description="URI of the file")


class ExecutableCode(WireModel):
    """Code generated by the model that is meant to be executed."""

    language: str = Field(..., description="Programming language of the code")
    code: str = Field(..., description="Source to execute")


class CodeExecutionResult(WireModel):
    """Result of executing an ``ExecutableCode`` part."""

    outcome: str = Field(..., description="Outcome of the execution")
    output: str | None = Field(None, description="stdout on success, stderr otherwise")


class VideoMetadata(WireModel):
    """Metadata describing input video content."""

    start_offset: str | None = Field(None, description="Start offset, e.g. '1.5s'")
    end_offset: str | None = Field(None, description="End offset, e.g. '10s'")
    fps: float | None = Field(None, description="Frame rate in (0.0, 24.0]")


_PAYLOAD_FIELDS = (
    "text",
    "inline_data",
    "function_call",
    "function_response",
    "file_data",
    "executable_code",
    "code_execution_result",
    "video_metadata",
)


class Part(WireModel, Generic[T]):
    """A single unit of content.

    Callers must populate at most one payload field. This is a usage contract:
    nothing here rejects or rewrites a part that carries several payloads.
    ``payload_kinds()`` reports which ones are set.

    Attributes:
        text: Text, decoded into ``T`` when ``T`` is not ``str``
        inline_data: Inline media bytes
        function_call: Function call predicted by the model
        function_response: Result of a function call
        file_data: URI based data
        executable_code: Code generated by the model
        code_execution_result: Result of executing code
        video_metadata: Video offsets and frame rate
    """

    text: TypedText[T] | None = None
    inline_data: Blob | None = None
    function_call: FunctionCall | None = None
    function_response: FunctionResponse | None = None
    file_data: FileData | None = None
    executable_code: ExecutableCode | None = None
    code_execution_result: CodeExecutionResult | None = None
    video_metadata: VideoMetadata | None = None

    @classmethod
    def from_text(cls, value: Any) -> "Part[T]":
        """Create a text part; structured values are encoded as JSON."""
        return cls(text=value)

    @classmethod
    def from_inline_data(cls, mime_type: MimeType | str, data: bytes) -> "Part[T]":
        """Create a part holding ``data`` as base64 inline media."""
        return cls(inline_data=Blob(mime_type=mime_type, data=base64.b64encode(data).decode()))

    @classmethod
    def from_file_uri(cls, file_uri: str, mime_type: MimeType | str | None = None) -> "Part[T]":
        """Create a part referencing an uploaded file by URI."""
        return cls(file_data=FileData(file_uri=file_uri, mime_type=mime_type))

    @classmethod
    def from_function_call(cls, name: str, args: dict[str, Any] | None = None) -> "Part[T]":
        """Create a part holding a function call."""
        return cls(function_call=FunctionCall(name=name, args=args))

    @classmethod
    def from_function_response(cls, name: str, response: Any) -> "Part[T]":
        """Create a part holding the result of a function call."""
        return cls(function_response=FunctionResponse(name=name, response=response))

    def has_text(self) -> bool:
        """Return True if this part has text content."""
        return self.text is not None

    def payload_kinds(self) -> list[str]:
        """Return the names of the populated payload fields, in declaration order."""
        return [name for name in _PAYLOAD_FIELDS if getattr(self, name) is not None]


class Content(WireModel, Generic[T]):
    """An ordered sequence of parts, optionally attributed to a role.

    Attributes:
        role: Author of the content; may be omitted for single-turn requests
        parts: Parts in order
    """

    role: Role | None = Field(None, description="Author of the content")
    parts: list[Part[T]] = Field(..., description="Ordered parts")

    @classmethod
    def user(cls, *items: Any) -> "Content[T]":
        """Create a user turn. Items that are not parts become text parts."""
        return cls(role=Role.USER, parts=[_as_part(cls, item) for item in items])

    @classmethod
    def model(cls, *items: Any) -> "Content[T]":
        """Create a model turn. Items that are not parts become text parts."""
        return cls(role=Role.MODEL, parts=[_as_part(cls, item) for item in items])

    def first_part(self) -> Part[T] | None:
        """Return the first part, if any."""
        return self.parts[0] if self.parts else None

    def first_text(self) -> T | None:
        """Return the first part's text, if any."""
        part = self.first_part()
        return part.text if part is not None else None

    def texts(self) -> list[T]:
        """Return the text of every part that has one."""
        return [part.text for part in self.parts if part.text is not None]

    def as_plain_text(self) -> "Content[str]":
        """Re-encode this block with plain-text parts.

        Structured text becomes its JSON document, so a typed model turn can
        be sent back as conversation history.
        """
        return Content[str].model_validate(self.to_wire())


def _as_part(content_cls: type[Content[Any]], item: Any) -> Part[Any]:
    if isinstance(item, Part):
        return item
    args = content_cls.__pydantic_generic_metadata__["args"]
    part_cls = Part[args[0]] if args else Part
    return part_cls(text=item)


__all__ = [
    "Role",
    "MimeType",
    "Blob",
    "FunctionCall",
    "FunctionResponse",
    "FileData",
    "ExecutableCode",
    "CodeExecutionResult",
    "VideoMetadata",
    "Part",
    "Content",
]
