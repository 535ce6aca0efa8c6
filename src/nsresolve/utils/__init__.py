"""
nsresolve utilities package
"""

from .io_utils import read_source_file, write_text_file, find_fixture_files

__all__ = ["read_source_file", "write_text_file", "find_fixture_files"]
