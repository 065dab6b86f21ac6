from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union


@dataclass(frozen=True)
class FileList:
	"""Ordered file references copied to the clipboard."""
	paths: Tuple[Path, ...]


@dataclass(frozen=True)
class ClipboardImage:
	"""Raw bitmap as tightly packed RGBA rows, top to bottom."""
	width: int
	height: int
	data: bytes

	@property
	def expected_length(self) -> int:
		return self.width * self.height * 4


@dataclass(frozen=True)
class Text:
	content: str


@dataclass(frozen=True)
class Empty:
	pass


Snapshot = Union[FileList, ClipboardImage, Text, Empty]
