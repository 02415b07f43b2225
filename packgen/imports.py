"""Import bookkeeping and relative module resolution"""

import posixpath
from pathlib import Path, PurePath
from typing import Union

from .errors import fail

PathLike = Union[str, PurePath]


class ImportSet:
    """Imports discovered while emitting one file's body"""

    def __init__(self):
        self.local: set[str] = set()
        self.foreign: dict[str, str] = {}  # package path -> alias
        self.had_resource = False

    def add(self, mapped) -> str:
        """Record the imports a MappedType needs and return its text"""
        self.local.update(mapped.local)
        for path, name in mapped.foreign:
            self.register_foreign(path, name)
        return mapped.text

    def register_foreign(self, path: str, name: str) -> str:
        # First name seen for a package path wins
        return self.foreign.setdefault(path, name)


class ImportResolver:
    """Computes module specifiers between files under one output root"""

    def __init__(self, out: PathLike):
        self.out = Path(out)

    def module_for(self, current: PathLike, target: PathLike) -> str:
        """Relative module path from output file ``current`` to package file ``target``.

        ``target`` is relative to the output root; its extension is dropped.
        """
        return relative_module(current, Path(self.out, target))


def relative_module(current: PathLike, target: PathLike) -> str:
    here = posixpath.dirname(PurePath(current).as_posix())
    there = PurePath(target).as_posix()
    if posixpath.isabs(here) != posixpath.isabs(there):
        fail(f"Cannot relate {target} to {current}: paths do not share a root")
    try:
        rel = posixpath.relpath(there, here or ".")
    except ValueError as exc:
        fail(f"Cannot relate {target} to {current}: {exc}")
    if not rel.startswith(("./", "../")):
        rel = "./" + rel
    stem, ext = posixpath.splitext(rel)
    if ext:
        rel = stem
    return rel
