"""
Centralized file I/O utilities.

- Single place for encoding
- Use Path.read_text() consistently (no raw open/read)
"""

from pathlib import Path
from typing import List, Union

from .config import DEFAULT_FILE_ENCODING, FIXTURE_FILE_EXTENSION


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def write_text_file(path: Union[Path, str], text: str) -> None:
    p = Path(path) if not isinstance(path, Path) else path
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding=DEFAULT_FILE_ENCODING)


def find_fixture_files(root: Union[Path, str]) -> List[Path]:
    """Fixture files under root (recursively), sorted for deterministic order."""
    return sorted(Path(root).rglob(f"*{FIXTURE_FILE_EXTENSION}"))
