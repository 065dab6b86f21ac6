import platform
from typing import Type

from paster.clipboard.base import ClipboardReader
from paster.errors import ClipboardUnavailable


def get_clipboard_class() -> Type[ClipboardReader]:
    system = platform.system()

    if system == "Windows":
        from paster.clipboard.windows import WindowsClipboard
        return WindowsClipboard
    elif system == "Linux":
        from paster.clipboard.linux import LinuxClipboard
        return LinuxClipboard
    elif system == "Darwin":
        from paster.clipboard.macos import MacOSClipboard
        return MacOSClipboard
    else:
        raise ClipboardUnavailable(f"Platform '{system}' is not supported")


def get_clipboard() -> ClipboardReader:
    clipboard_class = get_clipboard_class()
    return clipboard_class()
