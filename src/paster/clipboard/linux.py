import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import unquote, urlparse

from paster.clipboard.base import ClipboardReader
from paster.errors import ClipboardUnavailable, ContentUnavailable
from paster.models import ClipboardImage

logger = logging.getLogger(__name__)


class LinuxClipboard(ClipboardReader):
    _FILE_TARGETS = ("x-special/gnome-copied-files", "text/uri-list")
    _IMAGE_TARGETS = (
        "image/png",
        "image/bmp",
        "image/x-ms-bmp",
        "image/jpeg",
        "image/webp",
        "image/tiff",
    )
    _TEXT_TARGETS = (
        "text/plain;charset=utf-8",
        "text/plain;charset=utf8",
        "utf8_string",
        "text/plain",
        "string",
    )
    _TIMEOUT = 1.5
    # stderr fragments from xclip and wl-paste when no display server answers
    _UNREACHABLE_MARKERS = (b"display", b"wayland", b"connect")

    def __init__(self) -> None:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-paste"):
            self.backend = "wayland"
        elif shutil.which("xclip"):
            self.backend = "x11"
        else:
            raise ClipboardUnavailable("no clipboard tool found, install wl-clipboard or xclip")
        logger.info(f"Using {self.backend} clipboard")
        self._types: Optional[Dict[str, str]] = None

    def query_file_list(self) -> List[Path]:
        target = self._match(self._FILE_TARGETS)
        paths = self._parse_paths(self._read(target))
        if not paths:
            raise ContentUnavailable("clipboard file list is empty")
        return paths

    def query_image(self) -> ClipboardImage:
        target = self._match(self._IMAGE_TARGETS)
        return self._decode_image(self._read(target))

    def query_text(self) -> str:
        if self._available_types():
            target: Optional[str] = self._match(self._TEXT_TARGETS)
        else:
            target = None
        return self._read(target).decode("utf-8", errors="replace")

    def _list_command(self) -> List[str]:
        if self.backend == "wayland":
            return ["wl-paste", "--list-types"]
        return ["xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"]

    def _read_command(self, target: Optional[str]) -> List[str]:
        if self.backend == "wayland":
            command = ["wl-paste"]
            if target is not None:
                command += ["--type", target]
            if target is None or target.lower() in self._TEXT_TARGETS:
                command.append("--no-newline")
            return command
        command = ["xclip", "-selection", "clipboard"]
        if target is not None:
            command += ["-t", target]
        return command + ["-o"]

    def _available_types(self) -> Dict[str, str]:
        if self._types is None:
            try:
                data = self._run_command(self._list_command())
            except subprocess.CalledProcessError as e:
                stderr = (e.stderr or b"").lower()
                if any(marker in stderr for marker in self._UNREACHABLE_MARKERS):
                    raise ClipboardUnavailable("cannot connect to the display server", e) from e
                # nothing has been copied yet
                data = b""
            self._types = {
                line.strip().lower(): line.strip()
                for line in data.decode("utf-8", errors="ignore").splitlines()
                if line.strip()
            }
        return self._types

    def _match(self, candidates: Sequence[str]) -> str:
        types = self._available_types()
        for candidate in candidates:
            if candidate in types:
                return types[candidate]
        raise ContentUnavailable(f"none of {', '.join(candidates)} on clipboard")

    def _read(self, target: Optional[str]) -> bytes:
        try:
            data = self._run_command(self._read_command(target))
        except subprocess.CalledProcessError as e:
            raise ContentUnavailable(f"could not read {target or 'clipboard'}", e) from e
        if not data:
            raise ContentUnavailable(f"{target or 'clipboard'} is empty")
        return data

    def _run_command(self, command: List[str]) -> bytes:
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=self._TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise ClipboardUnavailable(f"{command[0]} did not respond", e) from e
        return result.stdout

    @staticmethod
    def _parse_paths(data: bytes) -> List[Path]:
        text = data.decode("utf-8", errors="ignore")
        lines = [line.strip() for line in text.replace(
            "\r", "\n").split("\n") if line.strip()]
        if lines and lines[0].lower() in {"copy", "cut"}:
            lines = lines[1:]

        paths: List[Path] = []
        for entry in lines:
            if entry.startswith("#"):
                continue
            parsed = urlparse(entry)
            if parsed.scheme == "file":
                paths.append(Path(unquote(parsed.path)))
            elif not parsed.scheme:
                paths.append(Path(unquote(entry)))

        return paths
