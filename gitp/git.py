"""Read-only access to repository history through the ``git`` executable.

Every call runs ``git -C <root> ...`` with a timeout and captured output.
Failures raise ``GitCommandError``; callers decide what placeholder to show.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .diff.model import CommitMetadata

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 10.0
COMMIT_LOG_LIMIT = 50
UNREADABLE_FILE_MESSAGE = (
    "Unable to display this file at the selected commit. It may be binary or unavailable."
)


class GitCommandError(RuntimeError):
    """A git invocation failed to start, timed out, or exited non-zero."""

    def __init__(self, args: list[str], message: str) -> None:
        super().__init__(f"git {' '.join(args)}: {message}")
        self.git_args = list(args)
        self.message = message


def _run_git(root: Path | None, args: list[str], timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> str:
    command = ["git", *args] if root is None else ["git", "-C", str(root), *args]
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise GitCommandError(args, str(exc)) from exc
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise GitCommandError(args, detail)
    return proc.stdout


def commit_hash_of(commit_entry: str) -> str:
    """Return the hash token of a ``"<short-hash> <subject>"`` log entry."""
    parts = commit_entry.split()
    return parts[0] if parts else ""


def detect_repo_root(start: Path) -> Path | None:
    """Return the work-tree root containing ``start``.

    Asks git first, then walks up looking for a ``.git`` marker.
    """
    start = start.resolve()
    base = start if start.is_dir() else start.parent
    try:
        out = _run_git(base, ["rev-parse", "--show-toplevel"]).strip()
    except GitCommandError as exc:
        logger.debug("rev-parse failed for %s: %s", base, exc.message)
        out = ""
    if out:
        return Path(out).resolve()

    for candidate in (base, *base.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def parse_commit_metadata(output: str, commit_hash: str) -> CommitMetadata:
    """Parse ``git show --format=fuller`` output into commit metadata.

    Unlike the diff parser this keeps the whole message, with the first
    message line as ``subject``.
    """
    metadata = CommitMetadata(hash=commit_hash)
    in_message = False
    message_lines: list[str] = []

    for line in output.splitlines():
        if in_message:
            if line.startswith("    ") or not line.strip():
                message_lines.append(line.strip())
                continue
            break
        if line.startswith("commit "):
            parts = line.split()
            if len(parts) > 1:
                metadata.hash = parts[1]
        elif line.startswith("Author: "):
            metadata.author = line[len("Author: "):].strip()
        elif line.startswith("AuthorDate: "):
            metadata.date = line[len("AuthorDate: "):].strip()
        elif line.startswith("Commit: "):
            metadata.committer = line[len("Commit: "):].strip()
        elif line.startswith("CommitDate: "):
            metadata.commit_date = line[len("CommitDate: "):].strip()
        elif line.startswith("    "):
            in_message = True
            metadata.subject = line.strip()
            message_lines.append(line.strip())

    metadata.message = "\n".join(message_lines).strip("\n")
    return metadata


class GitRepository:
    """History queries for one work tree."""

    def __init__(self, root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.root = root
        self.timeout_seconds = timeout_seconds

    def _git(self, args: list[str]) -> str:
        logger.debug("git %s", " ".join(args))
        return _run_git(self.root, args, self.timeout_seconds)

    def load_branches(self) -> list[str]:
        output = self._git(["branch", "-a"])
        branches: list[str] = []
        for line in output.splitlines():
            stripped = line.strip()
            if not stripped:
                continue
            branches.append(stripped.removeprefix("*").strip())
        return branches

    def load_current_branch(self) -> str:
        return self._git(["branch", "--show-current"]).strip()

    def load_commits(self, branch: str) -> list[str]:
        output = self._git(["log", "--oneline", f"--max-count={COMMIT_LOG_LIMIT}", branch])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def load_files(self, commit_ref: str) -> list[str]:
        """Return paths touched by a commit, given a hash or a log entry."""
        output = self._git(["show", "--name-only", "--format=medium", commit_hash_of(commit_ref)])
        files: list[str] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            if line.startswith(("commit", "Author", "Date", "Merge:", "    ")):
                continue
            files.append(line.strip())
        return files

    def load_commit_metadata(self, commit_hash: str) -> CommitMetadata:
        output = self._git(["show", "--no-patch", "--format=fuller", commit_hash])
        return parse_commit_metadata(output, commit_hash)

    def load_diff(self, commit_hash: str, path: str | None = None) -> str:
        args = ["show", "--no-color", "--stat", "--patch", commit_hash]
        if path:
            args.extend(["--", path])
        return self._git(args)

    def load_file_at_commit(self, commit_hash: str, path: str) -> str:
        """Return file text at ``commit_hash``, or a readable error message."""
        try:
            return self._git(["show", "--no-color", "--textconv", f"{commit_hash}:{path}"])
        except GitCommandError as exc:
            logger.warning("cannot show %s at %s: %s", path, commit_hash, exc.message)
            return f"{UNREADABLE_FILE_MESSAGE}\n\nDetails: {exc.message}"
