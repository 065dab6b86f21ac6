import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

import win32clipboard as wc
import win32con
from PIL import ImageGrab

from paster.clipboard.base import ClipboardReader
from paster.errors import ClipboardUnavailable, ContentUnavailable
from paster.models import ClipboardImage


class WindowsClipboard(ClipboardReader):
    _OPEN_ATTEMPTS = 3

    def __init__(self) -> None:
        # fail early when another process holds the clipboard
        with self._opened():
            pass

    @contextmanager
    def _opened(self) -> Iterator[None]:
        last_error = None
        for _ in range(self._OPEN_ATTEMPTS):
            try:
                wc.OpenClipboard()
                break
            except Exception as e:
                last_error = e
                time.sleep(0.05)
        else:
            raise ClipboardUnavailable("could not open clipboard", last_error)

        try:
            yield
        finally:
            wc.CloseClipboard()

    def query_file_list(self) -> List[Path]:
        with self._opened():
            if not wc.IsClipboardFormatAvailable(win32con.CF_HDROP):
                raise ContentUnavailable("no file list on clipboard")
            files = wc.GetClipboardData(win32con.CF_HDROP)

        if isinstance(files, str):
            files = [files]
        paths = [Path(path) for path in files or []]
        if not paths:
            raise ContentUnavailable("clipboard file list is empty")
        return paths

    def query_image(self) -> ClipboardImage:
        try:
            clipboard_data = ImageGrab.grabclipboard()
        except OSError as e:
            raise ContentUnavailable("could not grab clipboard image", e) from e

        if clipboard_data is None or not hasattr(clipboard_data, "convert"):
            raise ContentUnavailable("no image on clipboard")

        rgba = clipboard_data.convert("RGBA")
        return ClipboardImage(rgba.width, rgba.height, rgba.tobytes())

    def query_text(self) -> str:
        with self._opened():
            if not wc.IsClipboardFormatAvailable(wc.CF_UNICODETEXT):
                raise ContentUnavailable("no text on clipboard")
            return wc.GetClipboardData(wc.CF_UNICODETEXT)
