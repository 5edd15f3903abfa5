from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from .errors import APIError

ImageSource = Union[str, os.PathLike, BinaryIO]

_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}
DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(slots=True)
class ImageUpload:
    stream: BinaryIO
    filename: str
    mime_type: str

    def as_multipart(self) -> dict[str, tuple[str, bytes, str]]:
        return {"image": (self.filename, self.stream.read(), self.mime_type)}


def mime_type_for(filename: str) -> str:
    _, ext = os.path.splitext(filename)
    return _MIME_TYPES.get(ext.lower(), DEFAULT_MIME_TYPE)


@contextmanager
def open_image(source: ImageSource) -> Iterator[ImageUpload]:
    """Resolve a path or binary stream into an upload.

    Files opened here are closed on exit; streams supplied by the caller are
    left open.
    """
    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        if not os.path.isfile(path):
            raise APIError(f"File not found: {path}")
        filename = os.path.basename(path)
        with open(path, "rb") as stream:
            yield ImageUpload(stream=stream, filename=filename, mime_type=mime_type_for(filename))
        return

    name = getattr(source, "name", None)
    filename = os.path.basename(name) if isinstance(name, str) and name else "image"
    yield ImageUpload(stream=source, filename=filename, mime_type=mime_type_for(filename))
