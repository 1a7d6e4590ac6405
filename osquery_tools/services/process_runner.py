"""Child process execution with a hard timeout.

Each call spawns exactly one child in its own session so that a timeout can
kill the whole process group, not just the direct child.  stdout and stderr
are drained concurrently with waiting for exit (``communicate``), so a chatty
child never blocks on a full pipe.
"""

from __future__ import annotations

import asyncio
import os
import signal
import time

from osquery_tools.models.execution import (
    Command,
    Completed,
    ExecutionResult,
    SpawnFailed,
    TimedOut,
)
from osquery_tools.utils.logging import get_logger

log = get_logger(__name__)


class ProcessRunner:
    """Runs a :class:`Command` and classifies how it ended."""

    def __init__(self, logger=None) -> None:
        self._log = logger or log

    async def run(self, command: Command, timeout: float) -> ExecutionResult:
        started = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *command.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as exc:
            self._log.warning(
                "process.spawn_failed",
                executable=command.executable,
                error=str(exc),
            )
            return SpawnFailed(cause=str(exc))

        timed_out = False
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
        except asyncio.TimeoutError:
            timed_out = True
            self._log.warning(
                "process.timeout",
                executable=command.executable,
                pid=proc.pid,
                timeout=timeout,
            )
            return TimedOut(timeout=timeout)
        finally:
            # On timeout the leader may already be gone while descendants
            # still hold the pipes, so the group is killed regardless.
            if timed_out or proc.returncode is None:
                _kill_tree(proc)
                await proc.wait()

        elapsed = time.monotonic() - started
        self._log.debug(
            "process.exited",
            executable=command.executable,
            rc=proc.returncode,
            elapsed=round(elapsed, 3),
        )
        return Completed(
            exit_code=proc.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            elapsed_time=elapsed,
        )


def _kill_tree(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the child's process group, or just the child where unsupported."""
    if hasattr(os, "killpg"):
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    try:
        proc.kill()
    except ProcessLookupError:
        pass
