from __future__ import annotations

from pathlib import Path

import pytest

from spreadview.runtime import load_customization, telemetry
from spreadview.runtime.settings import (
    DEFAULT_AUTOSAVE_EVERY,
    DEFAULT_EXTENSIONS,
    Settings,
    default_store_path,
)


def test_settings_defaults() -> None:
    settings = Settings.from_env({})

    assert settings.store_path == default_store_path()
    assert settings.store_path.name == "saves.yaml"
    assert settings.extensions == DEFAULT_EXTENSIONS
    assert settings.autosave_every == DEFAULT_AUTOSAVE_EVERY
    assert settings.default_split == 2


def test_settings_from_environment(tmp_path: Path) -> None:
    settings = Settings.from_env(
        {
            "SPREADVIEW_STORE": str(tmp_path / "store.yaml"),
            "SPREADVIEW_INIT_FILE": str(tmp_path / "init.py"),
            "SPREADVIEW_EXTENSIONS": "pdf, .CBZ",
            "SPREADVIEW_AUTOSAVE_EVERY": "5",
            "SPREADVIEW_DEFAULT_SPLIT": "1",
        }
    )

    assert settings.store_path == tmp_path / "store.yaml"
    assert settings.init_path == tmp_path / "init.py"
    assert settings.extensions == (".pdf", ".cbz")
    assert settings.autosave_every == 5
    assert settings.default_split == 1


def test_settings_ignore_invalid_numbers() -> None:
    settings = Settings.from_env(
        {"SPREADVIEW_AUTOSAVE_EVERY": "often", "SPREADVIEW_DEFAULT_SPLIT": "12"}
    )

    assert settings.autosave_every == DEFAULT_AUTOSAVE_EVERY
    assert settings.default_split == 2


def test_settings_read_process_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SPREADVIEW_STORE", str(tmp_path / "env.yaml"))

    assert Settings.from_env().store_path == tmp_path / "env.yaml"


def test_customization_missing_file(tmp_path: Path) -> None:
    assert load_customization(tmp_path / "absent.py") == []
    assert load_customization(None) == []


def test_customization_registers_hooks(tmp_path: Path) -> None:
    init = tmp_path / "init.py"
    init.write_text(
        "seen = []\n"
        "on_document_open(seen.append)\n"
        "@on_document_open\n"
        "def second(document):\n"
        "    pass\n",
        encoding="utf-8",
    )

    hooks = load_customization(init)

    assert len(hooks) == 2


def test_customization_errors_yield_no_hooks(tmp_path: Path) -> None:
    init = tmp_path / "init.py"
    init.write_text("import os\non_document_open(print)\n", encoding="utf-8")

    assert load_customization(init) == []


def test_record_event_and_span_run_without_console() -> None:
    telemetry.record_event("test.event", data={"value": 1}, logger_name="tests")
    with telemetry.span("tests::span", logger_name="tests", metadata={"k": "v"}) as handle:
        handle.add_metadata("extra", 2)

    assert handle.metadata["extra"] == "2"


def test_log_options_from_environment(tmp_path: Path) -> None:
    options = telemetry.LogOptions.from_env(
        {
            "SPREADVIEW_LOG_LEVEL": "debug",
            "SPREADVIEW_LOG_CONSOLE": "yes",
            "SPREADVIEW_LOG_FILE": str(tmp_path / "viewer.log"),
        }
    )

    assert options.level == "DEBUG"
    assert options.console is True
    assert options.log_file == str(tmp_path / "viewer.log")
    assert telemetry.LogOptions.from_env({}).console is False


def test_span_failure_is_reraised() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("tests::boom", logger_name="tests"):
            raise KeyError("missing")
