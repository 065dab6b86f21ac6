import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(find_dotenv(usecwd=True))

WORKDIR_ENV = "PASTER_WORKDIR"
DATE_FORMAT_ENV = "PASTER_DATE_FORMAT"
DEFAULT_DATE_FORMAT = "%d/%m/%y"

RELATIVE_DAYS = ("yesterday", "today", "tomorrow", "next-week")


def default_work_dir() -> Optional[str]:
    return os.getenv(WORKDIR_ENV) or None


def default_date_format() -> str:
    return os.getenv(DATE_FORMAT_ENV) or DEFAULT_DATE_FORMAT


class PasteConfig(BaseModel):
    """Where artifacts go. Relative destinations resolve against work_dir."""
    dest_dir: Path
    work_dir: Optional[Path] = None

    @property
    def target_dir(self) -> Path:
        if self.work_dir is None or self.dest_dir.is_absolute():
            return self.dest_dir
        return self.work_dir / self.dest_dir

    def resolve_source(self, path: Path) -> Path:
        if self.work_dir is None or path.is_absolute():
            return path
        return self.work_dir / path


class DateConfig(BaseModel):
    day: str
    fmt: str = Field(default=DEFAULT_DATE_FORMAT)

    @field_validator("day")
    @classmethod
    def _known_day(cls, value: str) -> str:
        if value not in RELATIVE_DAYS:
            raise ValueError(f"day must be one of {', '.join(RELATIVE_DAYS)}")
        return value
