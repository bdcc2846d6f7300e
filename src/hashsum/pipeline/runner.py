"""Run one external tool with its standard output wired into a pipe."""

from __future__ import annotations

import fcntl
import logging
import os
import subprocess
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Sequence

from .errors import FatalPipelineError
from .models import Stage, StageOutcome, StageResult

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Pipe:
    """An OS pipe shared between the parent and one child at a time.

    Attributes:
        read_fd: Parent-side endpoint, non-blocking.
        write_fd: Endpoint handed to each child as its standard output.
    """

    read_fd: int
    write_fd: int
    closed: bool = field(default=False, init=False)

    @classmethod
    def create(cls, size_bytes: int | None = None) -> "Pipe":
        """Open a pipe with a non-blocking read end.

        Args:
            size_bytes: Requested kernel buffer size. Applied where the platform
                supports resizing pipes; ignored otherwise.

        Raises:
            FatalPipelineError: If the pipe cannot be created.
        """
        try:
            read_fd, write_fd = os.pipe()
        except OSError as exc:
            raise FatalPipelineError("Pipe creation failed", exc) from exc
        os.set_blocking(read_fd, False)
        set_pipe_size = getattr(fcntl, "F_SETPIPE_SZ", None)
        if size_bytes and set_pipe_size is not None:
            try:
                fcntl.fcntl(write_fd, set_pipe_size, size_bytes)
            except OSError as exc:
                LOGGER.debug("Could not resize pipe to %d bytes: %s", size_bytes, exc)
        return cls(read_fd=read_fd, write_fd=write_fd)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        for fd in (self.read_fd, self.write_fd):
            with suppress(OSError):
                os.close(fd)

    def __enter__(self) -> "Pipe":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class StageRunner:
    """Spawn a stage, wait for it, and classify how it terminated.

    The child writes its standard output into ``pipe.write_fd``; every other
    descriptor, the pipe's read end included, is closed in the child. The
    runner reports spawn and wait failures as outcomes and leaves policy to
    the caller.
    """

    def run(
        self,
        stage: Stage,
        argv: Sequence[str],
        pipe: Pipe,
        *,
        suppress_stderr: bool = False,
    ) -> StageResult:
        """Execute ``argv`` and block until it terminates.

        Args:
            stage: Stage kind, recorded on the result.
            argv: Program and arguments to execute.
            pipe: Pipe receiving the child's standard output.
            suppress_stderr: Send the child's standard error to the null device.

        Returns:
            StageResult: Classified outcome for the invocation.
        """
        stderr = subprocess.DEVNULL if suppress_stderr else None
        try:
            process = subprocess.Popen(
                list(argv),
                stdout=pipe.write_fd,
                stderr=stderr,
                close_fds=True,
            )
        except OSError as exc:
            LOGGER.debug("Failed to spawn %s stage %r: %s", stage.value, argv[0], exc)
            return StageResult(stage=stage, outcome=StageOutcome.SPAWN_FAILURE, error=exc)

        LOGGER.debug("Spawned %s stage (pid %d): %s", stage.value, process.pid, " ".join(argv))
        try:
            returncode = process.wait()
        except OSError as exc:
            LOGGER.debug("Waiting on %s stage (pid %d) failed: %s", stage.value, process.pid, exc)
            return StageResult(stage=stage, outcome=StageOutcome.WAIT_FAILURE, error=exc)

        outcome = StageOutcome.SUCCESS if returncode == 0 else StageOutcome.NON_ZERO_EXIT
        LOGGER.debug("%s stage exited with status %d", stage.value, returncode)
        return StageResult(stage=stage, outcome=outcome, returncode=returncode)


__all__ = ["Pipe", "StageRunner"]
