import io
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from PIL import Image

from paster.clipboard import ClipboardReader, get_clipboard
from paster.config import PasteConfig
from paster.errors import (
    EncodeFailed,
    ImageDecodeFailed,
    InvalidImageBuffer,
    MissingExtension,
    MissingFilename,
)
from paster.models import ClipboardImage, Empty, FileList, Snapshot, Text
from paster.utils.file_manager import FileManager, split_name, timestamp

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "bmp", "tiff", "webp"}
FENCE = "```"


def is_image_file(path: Path) -> bool:
    _, extension = split_name(path)
    return extension is not None and extension.lower() in IMAGE_EXTENSIONS


class PasteService:
    """Turns one clipboard snapshot into artifacts and Markdown on ``out``."""

    def __init__(self, config: PasteConfig, out: Optional[TextIO] = None) -> None:
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.files = FileManager(config.target_dir, display_dir=config.dest_dir)

    def paste(self, snapshot: Snapshot) -> List[Path]:
        """Run the handler for ``snapshot`` and return the artifacts written."""
        if isinstance(snapshot, FileList):
            return self.handle_file_list(snapshot.paths)
        if isinstance(snapshot, ClipboardImage):
            return [self.handle_image(snapshot)]
        if isinstance(snapshot, Text):
            self.handle_text(snapshot.content)
            return []
        if isinstance(snapshot, Empty):
            logger.info("Clipboard is empty, nothing to paste")
            return []
        raise TypeError(f"unknown clipboard snapshot {snapshot!r}")

    def handle_file_list(self, paths: Sequence[Path]) -> List[Path]:
        written = []
        for path in paths:
            emark = "!" if is_image_file(path) else ""
            stem, extension = split_name(path)
            if not stem:
                raise MissingFilename(f"Could not determine filename of '{path}'")
            if extension is None:
                raise MissingExtension(f"Could not determine extension of '{path}'")
            stem = stem.replace(" ", "_")

            new_filename = f"{stem}_{timestamp()}.{extension}"
            dest_path = self.files.copy_file(self.config.resolve_source(path), new_filename)

            self._emit(f"{emark}[{stem}]({dest_path})")
            written.append(dest_path)
        return written

    def handle_image(self, image: ClipboardImage) -> Path:
        if len(image.data) != image.expected_length:
            raise InvalidImageBuffer(
                f"Invalid image data length: got {len(image.data)} bytes, "
                f"expected {image.expected_length} for {image.width}x{image.height} RGBA"
            )
        if image.width <= 0 or image.height <= 0:
            raise ImageDecodeFailed(f"Could not create {image.width}x{image.height} image from raw data")

        try:
            img = Image.frombytes("RGBA", (image.width, image.height), image.data)
        except ValueError as e:
            raise ImageDecodeFailed("Could not create image from raw data", e) from e

        output = io.BytesIO()
        try:
            img.save(output, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeFailed("Could not encode image as PNG", e) from e

        dest_path = self.files.save_file(output.getvalue(), f"img_{timestamp()}.png")
        self._emit(f"![]({dest_path})")
        return dest_path

    def handle_text(self, content: str) -> None:
        self._emit(FENCE)
        self._emit(content)
        self._emit(FENCE)

    def _emit(self, line: str) -> None:
        print(line, file=self.out)


def run_paste(config: PasteConfig, clipboard: Optional[ClipboardReader] = None,
              out: Optional[TextIO] = None) -> List[Path]:
    """Read the clipboard once and materialize what it holds."""
    if clipboard is None:
        clipboard = get_clipboard()
    snapshot = clipboard.snapshot()
    logger.info(f"Clipboard holds {type(snapshot).__name__}")
    return PasteService(config, out=out).paste(snapshot)
