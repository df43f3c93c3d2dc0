"""
File Service

Whole-file reads and atomic whole-file replacement for ``mix.exs`` and
git hook scripts.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from mixbump.core.errors import FileAccessError

logger = logging.getLogger("MixBump.FileService")


class FileService:
    """
    Service class for file operations.

    Reads raise ``FileAccessError`` instead of returning None, because every
    caller has to stop when the document is missing.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize file service.

        Args:
            base_dir: Base directory relative paths are resolved against
        """
        self.base_dir = Path(base_dir).resolve() if base_dir else None
        logger.debug(f"FileService initialized (base_dir: {self.base_dir})")

    def resolve(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        if self.base_dir and not p.is_absolute():
            p = self.base_dir / p
        return p

    def exists(self, path: Union[str, Path]) -> bool:
        return self.resolve(path).is_file()

    def read_text(self, path: Union[str, Path], encoding: str = "utf-8") -> str:
        """
        Read file content.

        Raises:
            FileAccessError: if the file is missing or unreadable
        """
        p = self.resolve(path)
        if not p.is_file():
            raise FileAccessError(f"{path} not found")
        try:
            # newline="" keeps CRLF files byte-exact through an edit
            with p.open("r", encoding=encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {p}: {e}")
            raise FileAccessError(f"Could not read {path}: {e}") from e

    def write_atomic(self, path: Union[str, Path], content: str, encoding: str = "utf-8") -> None:
        """
        Replace the whole file in one step.

        The content goes to a temporary file in the same directory which is
        then renamed over the target, so readers never see a partial file.
        """
        p = self.resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
        try:
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
            if p.exists():
                shutil.copymode(p, tmp_name)
            os.replace(tmp_name, p)
        except OSError as e:
            logger.error(f"Failed to write {p}: {e}")
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileAccessError(f"Could not write {path}: {e}") from e
        logger.info(f"File written: {p}")

    def delete(self, path: Union[str, Path]) -> bool:
        """Delete a file. Returns False if it did not exist."""
        p = self.resolve(path)
        if not p.exists():
            return False
        try:
            p.unlink()
        except OSError as e:
            logger.error(f"Failed to delete {p}: {e}")
            raise FileAccessError(f"Could not delete {path}: {e}") from e
        logger.info(f"File deleted: {p}")
        return True
