from __future__ import annotations

import queue
import threading
from dataclasses import dataclass

from termsnake.controls import Command, map_key
from termsnake.render import build_frame
from termsnake.session import Session
from termsnake.terminal import Surface


@dataclass(frozen=True)
class KeyEvent:
    key: int | str


@dataclass(frozen=True)
class TickEvent:
    generation: int


Event = KeyEvent | TickEvent


class InputReader(threading.Thread):
    """Forwards raw keys from the surface onto the event queue."""

    def __init__(self, *, surface: Surface, events: queue.Queue[Event]) -> None:
        super().__init__(name="termsnake-input", daemon=True)
        self._surface = surface
        self._events = events

    def run(self) -> None:
        try:
            while True:
                for key in self._surface.read_keys():
                    self._events.put(KeyEvent(key))
        except EOFError:
            return


class Ticker(threading.Thread):
    """Puts a TickEvent on the queue every `interval` seconds until stopped."""

    def __init__(self, *, interval: float, generation: int, events: queue.Queue[Event]) -> None:
        super().__init__(name=f"termsnake-ticker-{generation}", daemon=True)
        self.interval = interval
        self.generation = generation
        self._events = events
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self.interval):
            self._events.put(TickEvent(self.generation))

    def stop(self) -> None:
        self._stopped.set()


class GameLoop:
    """Single consumer of input and tick events; the only writer of game state."""

    def __init__(self, *, session: Session, surface: Surface) -> None:
        self.session = session
        self.surface = surface
        self.events: queue.Queue[Event] = queue.Queue()
        self._ticker: Ticker | None = None
        self._generation = 0

    @property
    def ticker(self) -> Ticker | None:
        return self._ticker

    def _start_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
        self._generation += 1
        settings = self.session.game.settings
        direction = self.session.game.state.direction
        self._ticker = Ticker(
            interval=settings.tick_interval(direction),
            generation=self._generation,
            events=self.events,
        )
        self._ticker.start()

    def tick(self) -> None:
        game = self.session.game
        game.update()
        self.surface.paint(build_frame(game.state, game.settings))

    def _on_command(self, cmd: Command) -> bool:
        if cmd == Command.QUIT:
            return False
        if cmd == Command.RESTART:
            if self.session.restart():
                self._start_ticker()
                self.surface.paint(build_frame(self.session.game.state, self.session.game.settings))
            return True

        direction = cmd.direction
        if direction is None:
            return True
        state = self.session.game.state
        before = state.direction
        self.session.game.set_direction(direction)
        # Vertical moves tick slower; swap the timer when the axis changes.
        if before.is_vertical != state.direction.is_vertical:
            self._start_ticker()
        return True

    def handle(self, event: Event) -> bool:
        """Apply one event. Returns False when the player asked to quit."""
        if isinstance(event, TickEvent):
            if event.generation == self._generation:
                self.tick()
            return True
        cmd = map_key(event.key)
        if cmd is None:
            return True
        return self._on_command(cmd)

    def run(self) -> int:
        InputReader(surface=self.surface, events=self.events).start()
        self._start_ticker()
        self.surface.paint(build_frame(self.session.game.state, self.session.game.settings))
        try:
            while self.handle(self.events.get()):
                pass
        finally:
            if self._ticker is not None:
                self._ticker.stop()
        return 0
