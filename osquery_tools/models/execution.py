"""Process invocation data structures."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel


class Command(BaseModel):
    """An argv vector: executable name followed by its arguments."""

    argv: tuple[str, ...]

    model_config = {"frozen": True}

    @classmethod
    def of(cls, *argv: str) -> Command:
        return cls(argv=argv)

    @property
    def executable(self) -> str:
        return self.argv[0]


class Completed(BaseModel):
    """The child exited on its own; output is fully drained."""

    kind: Literal["completed"] = "completed"
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    elapsed_time: float = 0.0


class TimedOut(BaseModel):
    """The child exceeded its budget and was killed."""

    kind: Literal["timed_out"] = "timed_out"
    timeout: float


class SpawnFailed(BaseModel):
    """The child could not be started (missing binary, permissions...)."""

    kind: Literal["spawn_failed"] = "spawn_failed"
    cause: str


ExecutionResult = Union[Completed, TimedOut, SpawnFailed]
