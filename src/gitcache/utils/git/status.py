"""
Working tree cleanliness checks.
"""

from dataclasses import dataclass
from typing import Iterable, List

IGNORED = "!!"


@dataclass(frozen=True)
class StatusEntry:
    path: str
    code: str  # two-letter porcelain status code

    @property
    def is_ignored(self) -> bool:
        return self.code == IGNORED


def parse_porcelain_status(output: str) -> List[StatusEntry]:
    """
    Parse `git status --porcelain -z` output.

    Renames and copies carry their original path in the following field,
    which is skipped.
    """
    entries = []
    fields = iter(output.split("\0"))
    for field in fields:
        if len(field) < 4:
            continue
        code, path = field[:2], field[3:]
        if code[0] in "RC":
            next(fields, None)
        entries.append(StatusEntry(path=path, code=code))
    return entries


def dirty_paths(entries: Iterable[StatusEntry]) -> List[str]:
    """Paths that are neither unchanged nor ignored"""
    return [entry.path for entry in entries if not entry.is_ignored]


def is_clean(entries: Iterable[StatusEntry]) -> bool:
    return not dirty_paths(entries)
