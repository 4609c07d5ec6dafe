"""Git working-tree status and staging-index access.

Wraps the ``git`` executable: porcelain status records are classified into
coarse statuses and staged paths are written to the index with ``git add``.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import StageError, StartupError

logger = logging.getLogger(__name__)

STATUS_NEW = "new"
STATUS_MODIFIED = "modified"
STATUS_DELETED = "deleted"
STATUS_RENAMED = "renamed"
STATUS_IGNORED = "ignored"
STATUS_OTHER = "other"

GIT_OPEN_TIMEOUT_SECONDS = 5.0
GIT_STATUS_TIMEOUT_SECONDS = 10.0
GIT_ADD_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class StatusRecord:
    """One ``git status`` record: repository-relative path plus coarse status."""

    path: str
    status: str


def classify_porcelain_status(code: str) -> str:
    """Map a two-letter porcelain ``XY`` code to a coarse status name.

    Only the working-tree column decides new/modified; index-only changes
    (``"M "``, ``"A "``) are reported as ``STATUS_OTHER``.
    """
    if code == "??":
        return STATUS_NEW
    if code == "!!":
        return STATUS_IGNORED
    if len(code) != 2:
        return STATUS_OTHER
    index_flag, worktree_flag = code[0], code[1]
    if worktree_flag == "M":
        return STATUS_MODIFIED
    if worktree_flag == "D":
        return STATUS_DELETED
    if "R" in (index_flag, worktree_flag):
        return STATUS_RENAMED
    return STATUS_OTHER


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into ``(code, path)`` pairs."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        records.append((code, token[3:]))

        # Renamed/copied records are followed by a token holding the source path.
        if "R" in code or "C" in code:
            index += 1

    return records


def _run_git(
    cwd: Path,
    args: list[str],
    timeout_seconds: float,
) -> subprocess.CompletedProcess[str]:
    logger.debug("git -C %s %s", cwd, " ".join(args))
    return subprocess.run(
        ["git", "-C", str(cwd), *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout_seconds,
    )


def _git_error_text(proc: subprocess.CompletedProcess[str]) -> str:
    message = proc.stderr.strip().splitlines()
    if message:
        return message[-1]
    return f"git exited with status {proc.returncode}"


class GitRepository:
    """Open repository handle owned by one gitstage session.

    ``add_path`` queues a path for the staging index in memory and
    ``persist`` writes all queued paths to ``.git/index``.
    """

    def __init__(self, root: Path, git_dir: Path) -> None:
        self.root = root
        self.git_dir = git_dir
        self._pending: list[str] = []

    @classmethod
    def open(cls, path: Path) -> GitRepository:
        """Resolve the repository containing ``path`` or raise ``StartupError``."""
        try:
            proc = _run_git(
                path,
                ["rev-parse", "--show-toplevel", "--git-dir"],
                GIT_OPEN_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise StartupError(f"cannot run git: {exc}") from exc
        if proc.returncode != 0:
            raise StartupError(f"{path} is not a git repository ({_git_error_text(proc)})")

        lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            raise StartupError(f"{path} is not inside a git working tree")

        root = Path(lines[0]).resolve()
        git_dir = Path(lines[1])
        if not git_dir.is_absolute():
            git_dir = path.resolve() / git_dir
        logger.info("opened repository %s", root)
        return cls(root, git_dir.resolve())

    def query_status(self, include_untracked: bool, include_ignored: bool) -> list[StatusRecord]:
        """Return working-tree status records in git's output order."""
        args = ["status", "--porcelain=v1", "-z"]
        args.append("--untracked-files=all" if include_untracked else "--untracked-files=no")
        if include_ignored:
            args.append("--ignored")
        try:
            proc = _run_git(self.root, args, GIT_STATUS_TIMEOUT_SECONDS)
        except (OSError, subprocess.SubprocessError) as exc:
            raise StartupError(f"cannot query status: {exc}") from exc
        if proc.returncode != 0:
            raise StartupError(f"cannot query status: {_git_error_text(proc)}")

        return [
            StatusRecord(path=path, status=classify_porcelain_status(code))
            for code, path in iter_porcelain_records(proc.stdout)
            if path
        ]

    def add_path(self, path: str) -> None:
        """Queue ``path`` for the staging index; it must exist in the working tree."""
        if not os.path.lexists(self.root / path):
            raise StageError(path, "path no longer exists")
        if path not in self._pending:
            self._pending.append(path)

    def persist(self) -> None:
        """Write queued paths to the index file. Queue is cleared even on failure."""
        pending, self._pending = self._pending, []
        if not pending:
            return
        label = ", ".join(pending)
        try:
            # Entry paths are file names, not pathspec patterns.
            proc = _run_git(
                self.root,
                ["--literal-pathspecs", "add", "--", *pending],
                GIT_ADD_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise StageError(label, str(exc)) from exc
        if proc.returncode != 0:
            raise StageError(label, _git_error_text(proc))
        logger.debug("index updated for %s", label)
