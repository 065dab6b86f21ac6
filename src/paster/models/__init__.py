from paster.models.snapshot import ClipboardImage, Empty, FileList, Snapshot, Text

__all__ = [
    'ClipboardImage',
    'Empty',
    'FileList',
    'Snapshot',
    'Text',
]
