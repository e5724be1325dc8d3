"""Structured model for parsed ``git show`` / unified-diff output.

Values are plain dataclasses so two parses of the same text compare equal.
A ``ParsedDiff`` is always rebuilt from scratch, never patched in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LineKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True)
class DiffLine:
    """One body line of a hunk, kept verbatim including its marker column."""

    content: str
    kind: LineKind

    @property
    def text(self) -> str:
        """Return content without the ``+``/``-`` marker of changed lines."""
        if self.kind is LineKind.ADDED and self.content.startswith("+"):
            return self.content[1:]
        if self.kind is LineKind.REMOVED and self.content.startswith("-"):
            return self.content[1:]
        return self.content


@dataclass
class Hunk:
    header: str
    lines: list[DiffLine] = field(default_factory=list)


@dataclass
class FileDiff:
    header: str
    old_path: str = ""
    new_path: str = ""
    hunks: list[Hunk] = field(default_factory=list)


@dataclass(frozen=True)
class FileStat:
    """One ``path | N ++--`` summary row."""

    file: str
    change_count: str
    histogram: str


@dataclass
class CommitMetadata:
    """Commit header fields.

    The diff parser only fills ``hash``, ``author``, ``date`` and the first
    message line. ``GitRepository.load_commit_metadata`` fills the rest.
    """

    hash: str
    author: str = ""
    date: str = ""
    message: str = ""
    committer: str = ""
    commit_date: str = ""
    subject: str = ""


@dataclass
class ParsedDiff:
    metadata: CommitMetadata | None = None
    file_stats: list[FileStat] = field(default_factory=list)
    file_diffs: list[FileDiff] = field(default_factory=list)

    @property
    def first_file(self) -> FileDiff | None:
        """Return the file section shown by the diff view, if any."""
        return self.file_diffs[0] if self.file_diffs else None
