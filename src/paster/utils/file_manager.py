import datetime
import logging
import shutil
from pathlib import Path
from typing import Optional, Tuple

from paster.errors import CopyFailed, EncodeFailed

logger = logging.getLogger(__name__)


def timestamp(now: Optional[datetime.datetime] = None) -> str:
    """UTC ``YYYYMMDD_HHMMSS_mmm`` used to name artifacts."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return f"{now.strftime('%Y%m%d_%H%M%S')}_{now.microsecond // 1000:03d}"


def split_name(path: Path) -> Tuple[str, Optional[str]]:
    """Split a file name into stem and extension at the last dot.

    Leading dots belong to the stem (``.bashrc`` has no extension), a
    trailing dot gives an empty extension and a name without a dot gives
    None. ``..`` and ``/`` have no name at all, so the stem is empty.
    """
    name = path.name
    if name in ("", ".", ".."):
        return "", None
    index = name.rfind(".")
    if index <= 0:
        return name, None
    return name[:index], name[index + 1:]


class FileManager:
    """Writes artifacts into one destination directory.

    ``base_dir`` is where files land on disk. ``display_dir`` is the prefix
    used in the paths handed back to callers, which lets a relative
    destination stay relative in printed links.
    """

    def __init__(self, base_dir: Path, display_dir: Optional[Path] = None):
        self.base_dir = base_dir
        self.display_dir = display_dir if display_dir is not None else base_dir

    def ensure_dir(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def reserve(self, file_name: str) -> Tuple[Path, Path]:
        """Return (disk path, display path) for a name not yet taken."""
        self.ensure_dir()
        candidate = Path(file_name)
        original_stem = candidate.stem
        original_suffix = candidate.suffix
        name = file_name

        counter = 1
        while (self.base_dir / name).exists():
            name = f"{original_stem}_{counter}{original_suffix}"
            counter += 1

        return self.base_dir / name, self.display_dir / name

    def copy_file(self, source: Path, file_name: str) -> Path:
        file_path, display_path = self.reserve(file_name)
        try:
            shutil.copy(source, file_path)
        except OSError as e:
            raise CopyFailed(f"can't copy file {source}", e) from e
        logger.info(f"Copied {source} to {file_path}")
        return display_path

    def save_file(self, payload: bytes, file_name: str) -> Path:
        file_path, display_path = self.reserve(file_name)
        try:
            file_path.write_bytes(payload)
        except OSError as e:
            raise EncodeFailed(f"can't write {file_path}", e) from e
        logger.info(f"Saved file to {file_path}")
        return display_path
