"""Tests for CLI logging configuration."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from hashsum.logging_setup import configure_logging


def test_debug_records_reach_console() -> None:
    buffer = io.StringIO()
    configure_logging("debug", console=Console(file=buffer, width=120))

    logging.getLogger("hashsum.pipeline.runner").debug("Spawned list stage")

    assert "Spawned list stage" in buffer.getvalue()


def test_default_level_hides_debug_records() -> None:
    buffer = io.StringIO()
    configure_logging("WARNING", console=Console(file=buffer, width=120))

    logging.getLogger("hashsum.pipeline.orchestrator").debug("Skipping 'a'")

    assert buffer.getvalue() == ""


def test_reconfiguring_replaces_handler() -> None:
    configure_logging("INFO", console=Console(file=io.StringIO()))
    configure_logging("INFO", console=Console(file=io.StringIO()))

    assert len(logging.getLogger("hashsum").handlers) == 1


def test_unknown_level_raises() -> None:
    with pytest.raises(ValueError):
        configure_logging("CHATTY")
