from __future__ import annotations

from pathlib import Path

import pytest

from spreadview.adapters.textual.app import main


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPREADVIEW_STORE", str(tmp_path / "saves.yaml"))
    monkeypatch.setenv("SPREADVIEW_INIT_FILE", str(tmp_path / "init.py"))


def test_missing_path_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1

    out = capsys.readouterr().out
    assert out.startswith("usage: spreadview")


def test_unopenable_path_reports_error(
    capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    missing = tmp_path / "missing.pdf"

    assert main([str(missing)]) == 1

    out = capsys.readouterr().out
    assert "spreadview:" in out
    assert "missing.pdf" in out
    assert not (tmp_path / "saves.yaml").exists()
