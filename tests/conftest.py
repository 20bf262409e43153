from __future__ import annotations

import sys
from pathlib import Path

import pytest

SAMPLE = """\
nop +0
acc +1
jmp +4
acc +3
jmp -3
acc -99
acc +1
jmp -4
acc +6
"""


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture()
def sample_source() -> str:
    return SAMPLE


@pytest.fixture()
def sample_file(tmp_path: Path, sample_source: str) -> Path:
    p = tmp_path / "day8"
    p.write_text(sample_source, encoding="utf-8")
    return p
