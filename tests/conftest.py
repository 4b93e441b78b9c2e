from collections.abc import Callable
from pathlib import Path

import pytest

from letter.letter_parser import Parser


@pytest.fixture  # type: ignore[misc]
def parser() -> Parser:
    return Parser()


@pytest.fixture  # type: ignore[misc]
def letter_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write source to a `.letter` file under tmp_path and return its path."""

    def write(source: str, name: str = "input.letter") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return write
