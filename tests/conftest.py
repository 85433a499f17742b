"""Shared fixtures for synthetic DART extract files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest


@pytest.fixture
def write_filing(tmp_path):
    """Write cp949-encoded extract files into ``tmp_path / 'data'``."""

    data_dir = tmp_path / "data"
    data_dir.mkdir()

    def _write(name: str, lines: Iterable[str]) -> Path:
        path = data_dir / name
        header = "\t".join(["재무제표종류", "종목코드", "회사명"] + ["-"] * 11)
        content = "\r\n".join([header, *lines]) + "\r\n"
        path.write_bytes(content.encode("cp949"))
        return path

    _write.data_dir = data_dir
    return _write
