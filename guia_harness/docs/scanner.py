"""
Markdown corpus discovery and line iteration shared by the doc checks.
"""
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from guia_harness.utils.logger import get_logger

logger = get_logger("docs")

PathLike = Union[str, Path]


def find_markdown_files(root: PathLike = ".", exclude_dirs: Iterable[str] = ()) -> List[Path]:
    """
    Find all markdown files below ``root``.

    Directories whose name is in ``exclude_dirs`` are pruned.

    Returns:
        Sorted list of paths
    """
    excluded = set(exclude_dirs)
    md_files: List[Path] = []

    for current, dirs, files in os.walk(root):
        dirs[:] = [d for d in dirs if d not in excluded]
        for file in files:
            if file.endswith('.md'):
                md_files.append(Path(current) / file)

    return sorted(md_files)


def read_lines(path: PathLike) -> List[str]:
    """
    Read a text file leniently.

    Undecodable bytes are dropped. Unreadable files are logged and yield
    no lines.
    """
    try:
        with open(path, 'r', encoding='utf-8', errors='ignore') as f:
            return f.read().split('\n')
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return []


def is_fence(line: str) -> bool:
    return line.strip().startswith('```')


def iter_prose_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(line_number, line)`` for lines outside fenced code blocks.

    Fence lines themselves are never yielded. Line numbers start at 1.
    """
    in_code_block = False
    for line_num, line in enumerate(lines, 1):
        if is_fence(line):
            in_code_block = not in_code_block
            continue
        if not in_code_block:
            yield line_num, line
