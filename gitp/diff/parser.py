"""Line scanner turning ``git show --stat --patch`` text into a ``ParsedDiff``.

Parsing never fails. Truncated or malformed input yields partial structures.
"""

from __future__ import annotations

import re

from .model import CommitMetadata, DiffLine, FileDiff, FileStat, Hunk, LineKind, ParsedDiff

_FILE_STAT_RE = re.compile(r"^(.+?)\s+\|\s+(\d+)\s+([+-]+)$")
_MESSAGE_INDENT = "    "


def _line_kind(line: str) -> LineKind:
    if line.startswith("+"):
        return LineKind.ADDED
    if line.startswith("-"):
        return LineKind.REMOVED
    return LineKind.CONTEXT


def _scan_metadata(line: str, parsed: ParsedDiff) -> None:
    """Update commit header fields from one line."""
    if line.startswith("commit "):
        parts = line.split()
        parsed.metadata = CommitMetadata(hash=parts[1] if len(parts) > 1 else "")
        return

    metadata = parsed.metadata
    if metadata is None:
        return
    if line.startswith("Author: "):
        metadata.author = line[len("Author: "):]
    elif line.startswith("Date: "):
        metadata.date = line[len("Date: "):]
    elif line.startswith(_MESSAGE_INDENT) and not metadata.message:
        # Only the first message line is kept.
        metadata.message = line.strip()


def _scan_file_stat(line: str, parsed: ParsedDiff) -> None:
    if "|" not in line or "+++" not in line or "---" not in line:
        return
    match = _FILE_STAT_RE.match(line)
    if match is None:
        return
    parsed.file_stats.append(
        FileStat(
            file=match.group(1).strip(),
            change_count=match.group(2),
            histogram=match.group(3),
        )
    )


def split_lines(text: str) -> list[str]:
    """Split on ``\n`` only, as git does.

    A trailing newline adds no empty line, and one ``\r`` before each ``\n``
    is dropped so CRLF text reads like LF text. Other separators such as
    ``\r`` alone, ``\x0c`` or ``\u2028`` stay inside their line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_diff(text: str) -> ParsedDiff:
    """Parse raw diff text into metadata, file stats and per-file hunks.

    Metadata and file-stat detection run on every line independently of the
    file/hunk scanner, which keeps at most one open file and one open hunk.
    """
    parsed = ParsedDiff()
    current_file: FileDiff | None = None
    current_hunk: Hunk | None = None

    for line in split_lines(text):
        _scan_metadata(line, parsed)
        _scan_file_stat(line, parsed)

        if line.startswith("diff --git"):
            if current_file is not None:
                if current_hunk is not None:
                    current_file.hunks.append(current_hunk)
                parsed.file_diffs.append(current_file)
            current_file = FileDiff(header=line)
            current_hunk = None
        elif line.startswith("--- a/"):
            if current_file is not None:
                current_file.old_path = line[len("--- a/"):]
        elif line.startswith("+++ b/"):
            if current_file is not None:
                current_file.new_path = line[len("+++ b/"):]
        elif line.startswith("@@"):
            if current_file is not None:
                if current_hunk is not None:
                    current_file.hunks.append(current_hunk)
                current_hunk = Hunk(header=line)
        elif current_file is not None and current_hunk is not None:
            current_hunk.lines.append(DiffLine(content=line, kind=_line_kind(line)))

    if current_file is not None:
        if current_hunk is not None:
            current_file.hunks.append(current_hunk)
        parsed.file_diffs.append(current_file)

    return parsed
