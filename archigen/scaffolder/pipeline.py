"""Ordered, fail-fast execution of generation steps.

A ``Pipeline`` runs its ``Step`` list strictly in declaration order on the
calling thread.  Every step produces exactly one ``StepEvent`` for the
progress callback.  The first failing step moves the pipeline into the
terminal ``FAILED`` state and raises ``StepError``; files written by earlier
steps are left on disk.

State machine::

    IDLE -> RUNNING(i) -> RUNNING(i+1) -> ... -> COMPLETED
                     \\-> FAILED(i, error)
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from rich.markup import escape

from archigen.errors import ScaffoldError, StepError
from archigen.utils import console, err_console, format_duration


class PipelineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TOLERATED = "tolerated"


@dataclass(frozen=True)
class Step:
    """A labelled unit of work.

    Attributes:
        label: Human-readable description shown in progress output.
        action: No-argument callable that renders and writes files.
        tolerate: Error types that are reported but do not abort the run.
    """

    label: str
    action: Callable[[], object]
    tolerate: tuple[type[ScaffoldError], ...] = field(default=())


@dataclass(frozen=True)
class StepEvent:
    """Progress notification emitted once per executed step."""

    index: int
    label: str
    status: StepStatus
    elapsed: float
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status is not StepStatus.FAILED


StepCallback = Callable[[StepEvent], None]


def console_reporter(event: StepEvent) -> None:
    """Default progress sink: one line per step on the Rich consoles."""
    timing = f"[dim]({format_duration(event.elapsed)})[/dim]"
    if event.status is StepStatus.SUCCEEDED:
        console.print(f"   [green]✔[/green] {event.label} {timing}")
    elif event.status is StepStatus.TOLERATED:
        console.print(f"   [yellow]![/yellow] {event.label} [yellow]skipped: {escape(str(event.error))}[/yellow]")
    else:
        err_console.print(f"   [red]✘[/red] {event.label}: [red]{escape(str(event.error))}[/red]")


class Pipeline:
    """Runs a fixed sequence of steps once.

    Attributes:
        steps: The ordered steps to execute.
        state: Current ``PipelineState``.
        current_index: Index of the running (or failed) step, ``None`` while idle.
        error: The ``StepError`` that ended the run, if any.
        events: Every event emitted so far, in order.
    """

    def __init__(
        self,
        steps: Sequence[Step],
        on_step: StepCallback | None = None,
    ) -> None:
        self.steps: tuple[Step, ...] = tuple(steps)
        self.on_step = on_step or console_reporter
        self.state = PipelineState.IDLE
        self.current_index: int | None = None
        self.error: StepError | None = None
        self.events: list[StepEvent] = []

    def run(self) -> None:
        """Execute every step in order.

        Raises:
            StepError: The first step that raised a ``ScaffoldError`` it does
                not tolerate.  ``cause`` holds the original error.
            RuntimeError: The pipeline was already run.
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already {self.state.value}; build a new one")

        self.state = PipelineState.RUNNING
        for index, step in enumerate(self.steps):
            self.current_index = index
            started = time.monotonic()
            try:
                step.action()
            except ScaffoldError as exc:
                elapsed = time.monotonic() - started
                if step.tolerate and isinstance(exc, step.tolerate):
                    self._emit(StepEvent(index, step.label, StepStatus.TOLERATED, elapsed, exc))
                    continue
                self.state = PipelineState.FAILED
                self.error = StepError(index, step.label, exc)
                self._emit(StepEvent(index, step.label, StepStatus.FAILED, elapsed, exc))
                raise self.error from exc
            except Exception as exc:
                self.state = PipelineState.FAILED
                self._emit(
                    StepEvent(index, step.label, StepStatus.FAILED, time.monotonic() - started, exc)
                )
                raise
            self._emit(
                StepEvent(index, step.label, StepStatus.SUCCEEDED, time.monotonic() - started)
            )

        self.state = PipelineState.COMPLETED

    def _emit(self, event: StepEvent) -> None:
        self.events.append(event)
        self.on_step(event)
