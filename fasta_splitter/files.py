"""Locate input FASTA files and decide where their output goes."""

import glob
import os
from collections.abc import Iterator
from pathlib import Path

DEFAULT_EXTENSIONS = (".fasta", ".faa")

WILDCARD_CHARS = ("*", "?")


def is_fasta_file(file_path) -> bool:
    """True if the file ends in .fasta or .faa (any case)."""
    return Path(file_path).suffix.lower() in DEFAULT_EXTENSIONS


def has_wildcard(path) -> bool:
    return any(c in str(path) for c in WILDCARD_CHARS)


def expand_wildcard(input_pattern) -> list[Path]:
    """
    Files matching input_pattern, sorted by path.

    A path without wildcards is returned as-is, whether or not it exists,
    so that the caller reports the missing file.
    """
    if not has_wildcard(input_pattern):
        return [Path(input_pattern)]
    return sorted(Path(p) for p in glob.glob(str(input_pattern)) if os.path.isfile(p))


def split_search_pattern(input_pattern) -> tuple[Path, str | None]:
    """Split 'dir/*.fasta' into (dir, '*.fasta'); a bare directory has no file pattern."""
    path = Path(input_pattern)
    if path.is_dir():
        return path, None
    if has_wildcard(path.name):
        return path.parent, path.name
    return path.parent, path.name or None


def find_files_recursive(input_pattern, max_levels: int = 0) -> Iterator[tuple[Path, Path]]:
    """
    Yield (file_path, relative_directory) for files below the search root.

    Without a file pattern only FASTA files are returned. max_levels limits
    how many directory levels are examined; 0 means no limit.
    """
    root, file_pattern = split_search_pattern(input_pattern)

    for dir_path, dir_names, file_names in os.walk(root):
        dir_names.sort()
        relative_dir = Path(dir_path).relative_to(root)
        depth = len(relative_dir.parts) + 1
        if max_levels > 0 and depth >= max_levels:
            # Don't descend further
            dir_names[:] = []

        for file_name in sorted(file_names):
            if file_pattern is None:
                if not is_fasta_file(file_name):
                    continue
            elif not Path(file_name).match(file_pattern):
                continue
            yield Path(dir_path) / file_name, relative_dir


def resolve_output_directory(file_path, output_dir="", alternate_output_dir="",
                             recreate_hierarchy=False, relative_dir=None) -> str:
    """
    Directory where the split files for file_path should be written.

    An alternate output directory wins (optionally mirroring the input
    hierarchy below it), then output_dir, then the input file's directory.
    """
    if alternate_output_dir:
        if recreate_hierarchy and relative_dir is not None:
            return str(Path(alternate_output_dir) / relative_dir)
        return str(alternate_output_dir)
    if output_dir:
        return str(output_dir)
    return str(Path(file_path).resolve().parent)
