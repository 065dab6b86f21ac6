import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from PIL import Image, UnidentifiedImageError

from paster.errors import ContentUnavailable
from paster.models import ClipboardImage, Empty, FileList, Snapshot, Text

logger = logging.getLogger(__name__)


class ClipboardReader(ABC):
    """One read of the system clipboard.

    Each query raises ContentUnavailable when the clipboard holds some
    other kind of content, and ClipboardUnavailable when the clipboard
    itself cannot be reached.
    """

    @abstractmethod
    def query_file_list(self) -> List[Path]:
        pass

    @abstractmethod
    def query_image(self) -> ClipboardImage:
        pass

    @abstractmethod
    def query_text(self) -> str:
        pass

    def snapshot(self) -> Snapshot:
        try:
            paths = self.query_file_list()
            if paths:
                return FileList(tuple(paths))
        except ContentUnavailable as e:
            logger.debug(f"No file list: {e}")

        try:
            return self.query_image()
        except ContentUnavailable as e:
            logger.debug(f"No image: {e}")

        try:
            text = self.query_text()
        except ContentUnavailable as e:
            logger.debug(f"No text: {e}")
            return Empty()

        if not text.strip():
            return Empty()
        return Text(text)

    @staticmethod
    def _decode_image(payload: bytes) -> ClipboardImage:
        """Decode encoded image bytes (PNG, TIFF, ...) into an RGBA bitmap."""
        try:
            with Image.open(io.BytesIO(payload)) as img:
                rgba = img.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ContentUnavailable("clipboard image could not be decoded", e) from e
        return ClipboardImage(rgba.width, rgba.height, rgba.tobytes())
