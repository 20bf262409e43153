from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    """Load `<project>/.env`, or the nearest `.env` above the working directory."""
    local = project_root() / ".env"
    if not local.exists():
        local = Path(find_dotenv(usecwd=True) or local)
    load_dotenv(local)


@dataclass(frozen=True)
class BootcodeSettings:
    input_dir: Path
    input_name: str
    concurrency: int


def _positive_int(name: str, raw: str | None, *, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def load_settings(*, concurrency: int | None = None) -> BootcodeSettings:
    """An explicit `concurrency` wins over `BOOTCODE_CONCURRENCY`, which is then not read."""
    load_env()
    if concurrency is None:
        concurrency = _positive_int(
            "BOOTCODE_CONCURRENCY", os.getenv("BOOTCODE_CONCURRENCY"), default=1
        )
    return BootcodeSettings(
        input_dir=Path((os.getenv("BOOTCODE_INPUT_DIR") or "input").strip()),
        input_name=(os.getenv("BOOTCODE_INPUT_NAME") or "day8").strip(),
        concurrency=concurrency,
    )
