from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator


class ParserSettings(BaseModel):
    # Disabling this treats a leading byte-order mark as tag content.
    strip_bom: bool = True
    max_file_bytes: Optional[int] = None

    @field_validator("max_file_bytes")
    @classmethod
    def _positive_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("max_file_bytes must be positive")
        return value


class Settings(BaseModel):
    parser: ParserSettings = ParserSettings()
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).upper()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "metadata-file.yaml", cwd / "metadata-file.yml"):
        if candidate.exists():
            return candidate
    return None
