"""
Git Service

Service class for the few git operations mixbump needs: locating the hooks
directory and reading ``mix.exs`` as it was at a given revision.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from mixbump.core.errors import GitError
from mixbump.core.versioning import extract_version

logger = logging.getLogger("MixBump.GitService")


class RevisionStatus(Enum):
    FOUND = "found"
    NO_GIT = "no_git"
    NO_COMMITS = "no_commits"
    ERROR = "error"


@dataclass
class RevisionVersion:
    """Version recorded in a file at some revision."""
    status: RevisionStatus
    version: Optional[str] = None
    detail: Optional[str] = None


class GitService:
    """
    Service class for Git operations.

    Provides utilities for:
    - Detecting Git repositories
    - Locating the hooks directory
    - Reading file versions at a revision
    """

    def __init__(self, base_dir: Optional[Path] = None, timeout: int = 10):
        """
        Initialize Git service.

        Args:
            base_dir: Working directory for Git commands
            timeout: Seconds before a Git command is abandoned
        """
        self.base_dir = Path(base_dir).resolve() if base_dir else Path.cwd()
        self.timeout = timeout
        logger.debug(f"GitService initialized (base_dir: {self.base_dir})")

    def is_repo(self) -> bool:
        code, _ = self._run(["rev-parse", "--git-dir"])
        return code == 0

    def hooks_dir(self) -> Path:
        """
        Absolute path of the repository's hooks directory.

        Raises:
            GitError: if the base directory is not inside a git repository
        """
        code, output = self._run(["rev-parse", "--git-path", "hooks"])
        if code != 0:
            raise GitError(f"Not a git repository (could not locate hooks dir): {output}")
        hooks = Path(output)
        if not hooks.is_absolute():
            hooks = self.base_dir / hooks
        return hooks.resolve()

    def show_file(self, rev: str, path: str) -> Tuple[int, str]:
        return self._run(["show", f"{rev}:{path}"])

    def version_at(self, rev: str, path: str) -> RevisionVersion:
        """Read the version declared in ``path`` at revision ``rev``."""
        if not self.is_repo():
            return RevisionVersion(RevisionStatus.NO_GIT)

        code, output = self._run(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"])
        if code != 0:
            if rev == "HEAD":
                return RevisionVersion(RevisionStatus.NO_COMMITS)
            return RevisionVersion(RevisionStatus.ERROR, detail=f"unknown revision {rev}")

        code, output = self.show_file(rev, path)
        if code != 0:
            return RevisionVersion(RevisionStatus.ERROR, detail=output)

        version = extract_version(output)
        if version is None:
            return RevisionVersion(RevisionStatus.ERROR, detail="version not found in git")
        return RevisionVersion(RevisionStatus.FOUND, version=version)

    def _run(self, args: List[str]) -> Tuple[int, str]:
        """
        Run a Git command.

        Returns:
            (exit code, combined stdout/stderr stripped); -1 when git
            could not be started or timed out
        """
        cmd = ["git", *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.base_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                encoding="utf-8",
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"Git command error ({' '.join(cmd)}): {e}")
            return -1, str(e)

        output = result.stdout.strip()
        if result.returncode != 0:
            logger.debug(f"Git command failed ({' '.join(cmd)}): {output}")
        return result.returncode, output
