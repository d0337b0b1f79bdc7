from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_debug_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep debug log writes inside the test's tmp dir."""
    from food_order import config

    log_path = tmp_path / "debug.log"
    monkeypatch.setattr(config, "DEBUG_LOG_PATH", str(log_path))
    return log_path

