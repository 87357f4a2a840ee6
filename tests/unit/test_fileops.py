"""Unit tests for owner-only file writes."""

from __future__ import annotations

import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from playlister.utils.fileops import secure_atomic_write, secure_mkdir


class TestSecureMkdir:
    def test_creates_parents_with_700(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        secure_mkdir(target)
        assert target.is_dir()
        assert stat.S_IMODE(target.stat().st_mode) == 0o700

    def test_tightens_existing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "loose"
        target.mkdir(mode=0o755)
        secure_mkdir(target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o700


class TestSecureAtomicWrite:
    def test_text_with_600(self, tmp_path: Path) -> None:
        target = tmp_path / "playlister" / "credentials.json"
        secure_atomic_write(target, '{"access_token": "x"}')
        assert target.read_text() == '{"access_token": "x"}'
        assert stat.S_IMODE(target.stat().st_mode) == 0o600
        assert stat.S_IMODE(target.parent.stat().st_mode) == 0o700

    def test_bytes(self, tmp_path: Path) -> None:
        target = tmp_path / "raw.bin"
        secure_atomic_write(target, b"\x00\x01")
        assert target.read_bytes() == b"\x00\x01"

    def test_failed_replace_keeps_original_and_no_temp(self, tmp_path: Path) -> None:
        target = tmp_path / "config.toml"
        secure_atomic_write(target, "original")

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                secure_atomic_write(target, "new")

        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
