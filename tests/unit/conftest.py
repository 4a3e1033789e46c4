from pathlib import Path

import pytest


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary workspace root used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
