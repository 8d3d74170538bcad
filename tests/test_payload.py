import json
import pytest
from filstore.constants import MAX_FILE_SIZE
from filstore.errors import UnsupportedInputError, ValidationError
from filstore.payload import (
    Blob, BytesPayload, TextPayload, JsonPayload, BlobPayload, as_payload, check_size
)


class SizedData:
    def __init__(self, size):
        self.size = size

    def __len__(self):
        return self.size


class TestAsPayload:
    def test_bytes_like(self):
        """Test bytes, bytearray and memoryview all become BytesPayload"""
        for value in (b"abc", bytearray(b"abc"), memoryview(b"abc")):
            payload = as_payload(value)
            assert isinstance(payload, BytesPayload)
            assert payload.to_bytes() == b"abc"

    def test_text_is_utf8(self):
        payload = as_payload("héllo")
        assert isinstance(payload, TextPayload)
        assert payload.to_bytes() == "héllo".encode("utf-8")

    def test_json_values(self):
        payload = as_payload({"a": 1, "b": [1, 2]})
        assert isinstance(payload, JsonPayload)
        assert json.loads(payload.to_bytes()) == {"a": 1, "b": [1, 2]}
        assert isinstance(as_payload([1, 2, 3]), JsonPayload)

    def test_json_is_compact(self):
        assert as_payload({"a": 1}).to_bytes() == b'{"a":1}'

    def test_json_non_finite_floats_are_null(self):
        """Test NaN and infinities encode as null instead of invalid JSON"""
        value = {"x": float('nan'), "y": [float('inf'), 1.5, {"z": float('-inf')}]}
        assert JsonPayload(value).to_bytes() == b'{"x":null,"y":[null,1.5,{"z":null}]}'

    def test_blob_filename_from_name(self):
        payload = as_payload(Blob(b"\x89PNG", name="cat.png", type="image/png"))
        assert isinstance(payload, BlobPayload)
        assert payload.filename == "cat.png"
        assert payload.to_bytes() == b"\x89PNG"

    def test_unnamed_blob_has_no_filename(self):
        payload = as_payload(Blob(b"data"))
        assert payload.filename is None
        assert not payload.blob.is_file

    def test_variants_pass_through(self):
        payload = TextPayload("x", "x.txt")
        assert as_payload(payload) is payload

    def test_unsupported_types(self):
        """Test numbers, bools and None are rejected with a TypeError"""
        for value in (42, 3.14, True, None, object()):
            with pytest.raises(TypeError):
                as_payload(value)
            with pytest.raises(UnsupportedInputError):
                as_payload(value)


class TestCheckSize:
    def test_bounds(self):
        assert check_size(b"x") == 1
        with pytest.raises(ValidationError):
            check_size(b"")

    def test_max_size(self):
        """Test the 200 MiB limit without allocating 200 MiB"""
        assert check_size(SizedData(MAX_FILE_SIZE)) == MAX_FILE_SIZE
        with pytest.raises(ValidationError, match="200 MiB"):
            check_size(SizedData(MAX_FILE_SIZE + 1))


class TestBlob:
    def test_from_path(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG\r\n")

        blob = Blob.from_path(path)

        assert blob.name == "photo.png"
        assert blob.type == "image/png"
        assert blob.size == 6
        assert blob.is_file
