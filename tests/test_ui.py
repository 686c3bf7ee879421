"""Smoke tests for the UI and CLI modules (no display required)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from antsystem.ui.pygame_client import PygameRenderer


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from antsystem.__main__ import main

    assert callable(main)


def test_parser_collects_food() -> None:
    from antsystem.__main__ import build_parser

    args = build_parser().parse_args(["--food", "1", "2", "--food", "3", "4", "--headless", "5"])
    assert args.food == [[1, 2], [3, 4]]
    assert args.headless == 5


def test_headless_run_logs_summary(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    from antsystem.__main__ import main

    yaml_file = tmp_path / "tiny.yaml"
    yaml_file.write_text("width: 7\nheight: 7\ncell_spacing: 1\nant_count: 3\n")
    with caplog.at_level(logging.INFO, logger="antsystem"):
        main(["--config", str(yaml_file), "--headless", "5", "--food", "3", "0"])
    assert any("summary" in r.getMessage() for r in caplog.records)
