"""
Cross-platform clipboard access.

Each backend answers the same three queries (file list, image, text);
``ClipboardReader.snapshot`` turns them into a single tagged value.
"""

from paster.clipboard.base import ClipboardReader
from paster.clipboard.factory import get_clipboard_class, get_clipboard

__all__ = [
    'ClipboardReader',
    'get_clipboard_class',
    'get_clipboard',
]
