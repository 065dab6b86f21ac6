from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from paster.clipboard import ClipboardReader
from paster.errors import ContentUnavailable
from paster.models import ClipboardImage


class FakeClipboard(ClipboardReader):
    """Clipboard reader that serves whatever kinds it was built with."""

    def __init__(
        self,
        files: Optional[Sequence[Path]] = None,
        image: Optional[ClipboardImage] = None,
        text: Optional[str] = None,
    ) -> None:
        self.files = files
        self.image = image
        self.text = text
        self.queries: List[str] = []

    def query_file_list(self) -> List[Path]:
        self.queries.append("files")
        if self.files is None:
            raise ContentUnavailable("no files")
        return list(self.files)

    def query_image(self) -> ClipboardImage:
        self.queries.append("image")
        if self.image is None:
            raise ContentUnavailable("no image")
        return self.image

    def query_text(self) -> str:
        self.queries.append("text")
        if self.text is None:
            raise ContentUnavailable("no text")
        return self.text


@pytest.fixture
def make_file(tmp_path):
    source_dir = tmp_path / "source"
    source_dir.mkdir()

    def _make(name: str, contents: bytes = b"data") -> Path:
        path = source_dir / name
        path.write_bytes(contents)
        return path

    return _make


@pytest.fixture
def red_pixels() -> ClipboardImage:
    # 2x2: red, green / blue, transparent
    data = bytes([
        255, 0, 0, 255, 0, 255, 0, 255,
        0, 0, 255, 255, 0, 0, 0, 0,
    ])
    return ClipboardImage(2, 2, data)
