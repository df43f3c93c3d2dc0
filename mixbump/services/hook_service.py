"""
Hook Service

Installs and removes the git ``pre-commit`` hook that runs
``mixbump check``. Only hooks carrying our marker line are considered ours;
anything else is left alone unless forced.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from mixbump.core.errors import HookError
from mixbump.core.versioning import BumpType
from mixbump.services.file_service import FileService

logger = logging.getLogger("MixBump.HookService")

HOOK_NAME = "pre-commit"
HOOK_MARKER = "# installed by mixbump"


@dataclass
class HookOptions:
    auto_bump: bool = False
    yes: bool = False
    bump: Optional[BumpType] = None

    def check_args(self) -> List[str]:
        args: List[str] = []
        if self.auto_bump:
            args.append("--auto-bump")
        if self.bump is not None:
            args.extend(["--bump", self.bump.value])
        if self.yes:
            args.append("--yes")
        return args


class HookService:
    """Manages the mixbump pre-commit hook inside a hooks directory."""

    def __init__(self, hooks_dir: Path, file_service: Optional[FileService] = None):
        self.hooks_dir = Path(hooks_dir)
        self.files = file_service or FileService()

    @property
    def hook_path(self) -> Path:
        return self.hooks_dir / HOOK_NAME

    @staticmethod
    def render(options: HookOptions) -> str:
        command = " ".join(["mixbump", "check", *options.check_args()])
        return f"#!/bin/sh\n{HOOK_MARKER}\nset -e\n{command}\n"

    def is_ours(self) -> bool:
        if not self.hook_path.is_file():
            return False
        return HOOK_MARKER in self.files.read_text(self.hook_path)

    def install(self, options: HookOptions, force: bool = False) -> bool:
        """
        Write the hook. Returns False when an identical hook is already there.

        Raises:
            HookError: if a foreign hook exists and ``force`` is not set
        """
        script = self.render(options)
        if self.hook_path.exists():
            if not self.is_ours() and not force:
                raise HookError(
                    f"A {HOOK_NAME} hook already exists at {self.hook_path} and was not installed by mixbump.\n"
                    "Refusing to overwrite. Re-run with --force, or edit it manually."
                )
            if self.files.read_text(self.hook_path) == script:
                return False

        self.files.write_atomic(self.hook_path, script)
        mode = os.stat(self.hook_path).st_mode
        os.chmod(self.hook_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        logger.info(f"Installed {HOOK_NAME} hook at {self.hook_path}")
        return True

    def uninstall(self, force: bool = False) -> bool:
        """
        Remove the hook. Returns False when there was nothing to remove.

        Raises:
            HookError: if the hook was not installed by mixbump and ``force`` is not set
        """
        if not self.hook_path.exists():
            return False
        if not self.is_ours() and not force:
            raise HookError(
                f"The {HOOK_NAME} hook at {self.hook_path} was not installed by mixbump.\n"
                "Refusing to remove. Re-run with --force, or delete it manually."
            )
        return self.files.delete(self.hook_path)
