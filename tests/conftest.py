"""Shared fixtures for the hashsum test suite."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Iterator, Sequence

import pytest

from hashsum.pipeline import Pipe, Stage, StageOutcome, StageResult


class FakeRunner:
    """Stage runner that writes scripted output instead of spawning processes.

    Responses are keyed by stage and the last argument (the directory or file
    path). A status is either an exit code or a fatal ``StageOutcome``.
    """

    def __init__(
        self,
        responses: dict[tuple[Stage, str], tuple[int | StageOutcome, bytes]],
    ) -> None:
        self.responses = responses
        self.calls: list[tuple[Stage, list[str], bool]] = []
        self.pipes: list[Pipe] = []

    def run(
        self,
        stage: Stage,
        argv: Sequence[str],
        pipe: Pipe,
        *,
        suppress_stderr: bool = False,
    ) -> StageResult:
        self.calls.append((stage, list(argv), suppress_stderr))
        if pipe not in self.pipes:
            self.pipes.append(pipe)
        status, output = self.responses.get((stage, argv[-1]), (1, b""))
        if output:
            os.write(pipe.write_fd, output)
        if isinstance(status, StageOutcome):
            error = OSError(errno.EAGAIN, os.strerror(errno.EAGAIN))
            return StageResult(stage=stage, outcome=status, error=error)
        outcome = StageOutcome.SUCCESS if status == 0 else StageOutcome.NON_ZERO_EXIT
        return StageResult(stage=stage, outcome=outcome, returncode=status)

    def stages_for(self, path: str) -> list[Stage]:
        return [stage for stage, argv, _ in self.calls if argv[-1] == path]


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    """Undo handler and level changes made to the `hashsum` logger by the CLI."""
    logger = logging.getLogger("hashsum")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def pipe() -> Iterator[Pipe]:
    with Pipe.create() as created:
        yield created


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory so no user configuration is picked up."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for key in list(os.environ):
        if key.startswith("HASHSUM__"):
            monkeypatch.delenv(key)
    return home_dir


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner
