"""Owner-only file writes for credentials and config."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def secure_mkdir(path: Path) -> None:
    """Create ``path`` (and parents) and restrict it to the owner (0o700)."""
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)


def secure_atomic_write(path: Path, content: str | bytes) -> None:
    """Replace ``path`` with ``content`` in one rename, mode 0o600.

    Readers see either the old file or the complete new one.
    """
    secure_mkdir(path.parent)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}-", suffix=".tmp")
    mode = "wb" if isinstance(content, bytes) else "w"
    try:
        os.fchmod(fd, 0o600)
        with open(fd, mode, encoding=None if isinstance(content, bytes) else "utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
