import io
from pathlib import Path

import pytest

from tabscanner.errors import APIError
from tabscanner.images import mime_type_for, open_image


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.png", "image/png"),
        ("a.gif", "image/gif"),
        ("a.bmp", "image/bmp"),
        ("a.tiff", "image/tiff"),
        ("a.tif", "image/tiff"),
        ("a.webp", "image/jpeg"),
        ("image", "image/jpeg"),
    ],
)
def test_mime_type_for(filename: str, expected: str):
    assert mime_type_for(filename) == expected


def test_path_source_is_closed_after_use(tmp_path: Path):
    path = tmp_path / "scan.tif"
    path.write_bytes(b"data")

    with open_image(path) as upload:
        stream = upload.stream
        assert upload.filename == "scan.tif"
        assert upload.mime_type == "image/tiff"
        assert upload.as_multipart() == {"image": ("scan.tif", b"data", "image/tiff")}

    assert stream.closed


def test_path_source_closed_when_body_raises(tmp_path: Path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"data")

    with pytest.raises(RuntimeError):
        with open_image(str(path)) as upload:
            stream = upload.stream
            raise RuntimeError("upload failed")

    assert stream.closed


def test_missing_path_raises_generic_failure(tmp_path: Path):
    with pytest.raises(APIError, match="File not found"):
        with open_image(tmp_path / "nope.jpg"):
            pass


def test_stream_source_uses_name_or_default(tmp_path: Path):
    anonymous = io.BytesIO(b"bytes")
    with open_image(anonymous) as upload:
        assert upload.filename == "image"
        assert upload.mime_type == "image/jpeg"
    assert anonymous.closed is False

    path = tmp_path / "photo.gif"
    path.write_bytes(b"gif")
    with open(path, "rb") as handle:
        with open_image(handle) as upload:
            assert upload.filename == "photo.gif"
            assert upload.mime_type == "image/gif"
        assert handle.closed is False
