"""Event scheduling for the interactive browser.

Two producers feed one queue: a ticker thread emitting ``Tick`` at a fixed
interval and an input thread decoding raw stdin into ``KeyPress`` (plus
``Resize`` when the terminal size changes). A single consumer applies events
one at a time, so state transitions are serialized. Events from the two
producers are consumed in arrival order; no ordering between a tick and a key
that arrive together is guaranteed.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace

from ..input import read_key as default_read_key
from ..keymap import ModeKeymap
from ..terminal import terminal_size
from .commands import BrowseDeps, handle_command
from .state import Action, BrowseState, Command, Continue, HandleResult, Terminate

logger = logging.getLogger(__name__)

INPUT_POLL_MS = 120
WORKER_JOIN_SECONDS = 0.5


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Resize:
    columns: int
    lines: int


SystemEvent = Tick | KeyPress | Resize


@dataclass(frozen=True)
class LoopStep:
    """Outcome of one event: the handler result and whether to repaint."""

    result: HandleResult
    repaint: bool = False


def process_event(
    event: SystemEvent,
    state: BrowseState,
    keymap: ModeKeymap[Command],
    deps: BrowseDeps,
    clock: Callable[[], float] = time.monotonic,
) -> LoopStep:
    """Apply one event to ``state``.

    A tick repaints only the first time it sees a state (when no refresh is
    recorded yet). A key repaints only when the resulting state differs by
    value from the previous one. A resize always repaints.
    """
    if isinstance(event, Tick):
        if state.last_refresh_at is None:
            return LoopStep(Continue(replace(state, last_refresh_at=clock())), repaint=True)
        return LoopStep(Continue(state))

    if isinstance(event, KeyPress):
        command = keymap.process(state.mode, event.key)
        if command is None:
            return LoopStep(Continue(state))
        result = handle_command(state, command, deps)
        if isinstance(result, Terminate):
            logger.debug("Terminating with %r", result.action)
            return LoopStep(result)
        if result.state != state:
            return LoopStep(Continue(replace(result.state, last_refresh_at=clock())), repaint=True)
        return LoopStep(result)

    return LoopStep(Continue(replace(state, last_refresh_at=clock())), repaint=True)


def run_event_loop(
    events: Iterable[SystemEvent],
    state: BrowseState,
    keymap: ModeKeymap[Command],
    deps: BrowseDeps,
    render: Callable[[BrowseState], None],
    clock: Callable[[], float] = time.monotonic,
) -> Action | None:
    """Consume ``events`` until a command terminates the session.

    Returns the terminating action. An exhausted event source ends the
    session without an action.
    """
    for event in events:
        step = process_event(event, state, keymap, deps, clock)
        if isinstance(step.result, Terminate):
            return step.result.action
        state = step.result.state
        if step.repaint:
            render(state)
    return None


@dataclass(frozen=True)
class _WorkerFailure:
    error: BaseException


class MergedEventSource:
    """Merge periodic ticks and terminal input into one ordered stream.

    Use as a context manager; iteration blocks until the next event arrives
    and re-raises any exception raised by the input reader.
    """

    def __init__(
        self,
        stdin_fd: int,
        refresh_interval: float,
        read_key: Callable[..., str] = default_read_key,
        size_source: Callable[[], tuple[int, int]] | None = None,
        poll_ms: int = INPUT_POLL_MS,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.refresh_interval = refresh_interval
        self._read_key = read_key
        self._size_source = size_source if size_source is not None else (lambda: terminal_size(stdin_fd))
        self._poll_ms = poll_ms
        self._queue: queue.Queue[SystemEvent | _WorkerFailure] = queue.Queue()
        self._stop = threading.Event()
        self._workers: list[threading.Thread] = []

    def _tick_worker(self) -> None:
        while True:
            self._queue.put(Tick())
            if self._stop.wait(self.refresh_interval):
                return

    def _input_worker(self) -> None:
        last_size = self._size_source()
        try:
            while not self._stop.is_set():
                key = self._read_key(self.stdin_fd, timeout_ms=self._poll_ms)
                if self._stop.is_set():
                    # A key read after stop() is dropped; TCSAFLUSH in disable_tui_mode discards the rest.
                    return
                size = self._size_source()
                if size != last_size:
                    last_size = size
                    self._queue.put(Resize(columns=size[0], lines=size[1]))
                if key:
                    self._queue.put(KeyPress(key))
        except Exception as exc:
            self._queue.put(_WorkerFailure(exc))

    def start(self) -> None:
        if self._workers:
            return
        self._stop.clear()
        for name, target in (
            ("shellmark-ticks", self._tick_worker),
            ("shellmark-input", self._input_worker),
        ):
            worker = threading.Thread(target=target, name=name, daemon=True)
            worker.start()
            self._workers.append(worker)

    def stop(self) -> None:
        self._stop.set()
        for worker in self._workers:
            worker.join(WORKER_JOIN_SECONDS)
        self._workers.clear()

    def __enter__(self) -> MergedEventSource:
        self.start()
        return self

    def __exit__(self, *_exc_info) -> None:
        self.stop()

    def __iter__(self) -> Iterator[SystemEvent]:
        while True:
            item = self._queue.get()
            if isinstance(item, _WorkerFailure):
                raise item.error
            yield item
