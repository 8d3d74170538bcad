import json
import math
import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Optional, Union
from .constants import MIN_FILE_SIZE, MAX_FILE_SIZE, ERROR_MESSAGES
from .errors import UnsupportedInputError, ValidationError


@dataclass(frozen=True)
class Blob:
    """In-memory file handle: raw bytes plus an optional name and MIME type"""
    data: bytes
    name: Optional[str] = None
    type: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.name is not None

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike], type: str = None) -> 'Blob':
        with open(path, 'rb') as f:
            data = f.read()
        name = os.path.basename(os.fspath(path))
        if type is None:
            type, _ = mimetypes.guess_type(name)
        return cls(data=data, name=name, type=type)


@dataclass(frozen=True)
class BytesPayload:
    data: bytes
    filename: Optional[str] = None

    def to_bytes(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class TextPayload:
    text: str
    filename: Optional[str] = None

    def to_bytes(self) -> bytes:
        return self.text.encode('utf-8')


@dataclass(frozen=True)
class JsonPayload:
    value: Any
    filename: Optional[str] = None

    def to_bytes(self) -> bytes:
        text = json.dumps(_finite(self.value), separators=(',', ':'),
                          ensure_ascii=False, allow_nan=False)
        return text.encode('utf-8')


@dataclass(frozen=True)
class BlobPayload:
    blob: Blob
    filename: Optional[str] = None

    def __post_init__(self):
        if self.filename is None and self.blob.is_file:
            object.__setattr__(self, 'filename', self.blob.name)

    def to_bytes(self) -> bytes:
        return bytes(self.blob.data)


def _finite(value: Any) -> Any:
    """NaN and infinities become null, as JSON has no literal for them"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


Payload = Union[BytesPayload, TextPayload, JsonPayload, BlobPayload]
PAYLOAD_TYPES = (BytesPayload, TextPayload, JsonPayload, BlobPayload)


def as_payload(value: Any, filename: str = None) -> Payload:
    """
    Resolve a raw upload value to one of the payload variants.
    bytes-like -> BytesPayload, str -> TextPayload, dict/list -> JsonPayload,
    Blob -> BlobPayload. Variants pass through unchanged.
    """
    if isinstance(value, PAYLOAD_TYPES):
        return value
    if isinstance(value, Blob):
        return BlobPayload(value, filename)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesPayload(bytes(value), filename)
    if isinstance(value, str):
        return TextPayload(value, filename)
    if isinstance(value, (dict, list)):
        return JsonPayload(value, filename)
    raise UnsupportedInputError()


def check_size(data: bytes) -> int:
    size = len(data)
    if size < MIN_FILE_SIZE:
        raise ValidationError(ERROR_MESSAGES['FILE_TOO_SMALL'])
    if size > MAX_FILE_SIZE:
        raise ValidationError(ERROR_MESSAGES['FILE_TOO_LARGE'])
    return size
