"""Directory walking helpers shared by the uploader and the rewriter."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

SKIP_DIRS = {"node_modules"}

NamePredicate = Callable[[str], bool]


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def has_extension(*extensions: str, case_sensitive: bool = False) -> NamePredicate:
    """Build a file extension predicate, case-insensitive unless asked otherwise."""
    if case_sensitive:
        wanted = set(extensions)
    else:
        wanted = {ext.lower() for ext in extensions}

    def predicate(name: str) -> bool:
        suffix = Path(name).suffix
        return (suffix if case_sensitive else suffix.lower()) in wanted

    return predicate


def walk_files(root: Path, predicate: NamePredicate) -> List[Path]:
    """Recursively collect files under ``root`` whose name matches ``predicate``.

    Hidden entries and dependency caches are skipped. Directories are listed in
    sorted order so repeated runs visit files identically. Errors raised while
    listing a directory propagate to the caller.
    """
    matches: List[Path] = []
    for entry in sorted(Path(root).iterdir(), key=lambda p: p.name):
        if is_hidden(entry.name) or entry.name in SKIP_DIRS:
            continue
        if entry.is_dir():
            matches.extend(walk_files(entry, predicate))
        elif entry.is_file() and predicate(entry.name):
            matches.append(entry)
    return matches
