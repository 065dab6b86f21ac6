from pathlib import Path
from typing import List

try:
    from AppKit import NSPasteboard, NSPasteboardTypeString, NSPasteboardTypePNG, NSPasteboardTypeTIFF
    from Foundation import NSURL
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

from paster.clipboard.base import ClipboardReader
from paster.errors import ClipboardUnavailable, ContentUnavailable
from paster.models import ClipboardImage


class MacOSClipboard(ClipboardReader):

    def __init__(self) -> None:
        if not HAS_APPKIT:
            raise ClipboardUnavailable("AppKit is not available, install pyobjc")
        self._pasteboard = NSPasteboard.generalPasteboard()

    def query_file_list(self) -> List[Path]:
        file_urls = self._pasteboard.readObjectsForClasses_options_([NSURL], None)
        paths = [Path(url.path()) for url in file_urls or [] if url.isFileURL()]
        if not paths:
            raise ContentUnavailable("no file URLs on pasteboard")
        return paths

    def query_image(self) -> ClipboardImage:
        types = self._pasteboard.types() or []
        for pb_type in (NSPasteboardTypePNG, NSPasteboardTypeTIFF):
            if pb_type in types:
                data = self._pasteboard.dataForType_(pb_type)
                if data:
                    return self._decode_image(bytes(data))
        raise ContentUnavailable("no image on pasteboard")

    def query_text(self) -> str:
        text = self._pasteboard.stringForType_(NSPasteboardTypeString)
        if text is None:
            raise ContentUnavailable("no text on pasteboard")
        return str(text)
