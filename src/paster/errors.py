"""Exceptions raised while reading the clipboard and writing artifacts."""

from typing import Optional


class PasterError(Exception):
    """Base exception for paster."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.original_error = original_error

    def __str__(self):
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class ClipboardUnavailable(PasterError):
    """The system clipboard could not be opened."""
    pass


class ContentUnavailable(PasterError):
    """The clipboard does not hold the requested kind of content."""
    pass


class MissingFilename(PasterError):
    pass


class MissingExtension(PasterError):
    pass


class CopyFailed(PasterError):
    pass


class InvalidImageBuffer(PasterError):
    """Bitmap byte length does not match width * height * 4."""
    pass


class ImageDecodeFailed(PasterError):
    pass


class EncodeFailed(PasterError):
    pass
