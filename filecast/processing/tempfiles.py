"""Temporary path allocation shared by the materializer and executor."""

from __future__ import annotations

import base64
import secrets
import tempfile
from pathlib import Path

__all__ = ["default_temp_dir", "generate_temp_path"]

# 20 random bytes -> 32 base32 characters, no padding
_TOKEN_BYTES = 20


def default_temp_dir() -> Path:
    """Platform temp directory (honours TMPDIR and friends)."""
    return Path(tempfile.gettempdir())


def generate_temp_path(temp_dir: Path, extension: str = "") -> Path:
    """Return a fresh, unused path in ``temp_dir`` ending in ``extension``.

    The file itself is not created; the external program writes it.
    Names are 160-bit random tokens, so concurrent callers sharing the
    directory never collide.
    """
    token = base64.b32encode(secrets.token_bytes(_TOKEN_BYTES)).decode("ascii")
    return Path(temp_dir) / f"{token}{extension}"
