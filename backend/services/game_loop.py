"""
Scheduling harness around SimulationCore.

The core never schedules itself. GameLoop is the thin adapter that:
 - queues input events posted from any thread and applies them at the start
   of the next tick
 - asks an optional autopilot player for a move
 - runs ticks on a fixed period (grid) or from accumulated frame time
   (continuous)
 - hands a snapshot to every listener after each tick
 - records snapshots for replays
"""

import json
import logging
import os
import queue
import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Set

from domain.constants import VALID_MOVES, TOGGLE_PAUSE, RESTART
from domain.game_state import SimulationState
from engine.core import SimulationCore
from players.base import Player

logger = logging.getLogger(__name__)

Listener = Callable[[SimulationState], None]

# Ticks run per advance() call before the backlog is dropped
DEFAULT_MAX_CATCH_UP = 5


class GameLoop:
    """
    Drives a SimulationCore at a fixed cadence.

    Usage:
        loop = GameLoop(core, player=GreedyPlayer(core.config))
        loop.add_listener(lambda snapshot: print(snapshot.print_board()))
        loop.run(max_ticks=500)
    """

    def __init__(
        self,
        core: SimulationCore,
        player: Optional[Player] = None,
        tick_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        record_history: bool = True,
        max_catch_up: int = DEFAULT_MAX_CATCH_UP,
        game_id: Optional[str] = None,
    ):
        self.core = core
        self.player = player
        if tick_interval is None:
            tick_interval = core.config.tick_interval_ms / 1000.0
        self.tick_interval = tick_interval
        self.clock = clock
        self.sleep = sleep
        self.record_history = record_history
        self.max_catch_up = max_catch_up
        self.game_id = game_id or str(uuid.uuid4())

        self._events: "queue.SimpleQueue[str]" = queue.SimpleQueue()
        self._held: Set[str] = set()
        self._held_lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._accumulator = 0.0
        self._running = False
        self.ticks_run = 0
        self.start_time = time.time()
        self.history: List[Dict[str, Any]] = []

        if self.record_history:
            self.history.append(core.snapshot().to_dict())

    # --------------------------------------------------
    # Input
    # --------------------------------------------------

    def post(self, event: str):
        """Queue a direction, TOGGLE_PAUSE or RESTART for the next tick. Thread-safe."""
        self._events.put(event)

    def hold(self, direction: str):
        """Mark a direction as held (continuous mode key-down). Thread-safe."""
        if direction in VALID_MOVES:
            with self._held_lock:
                self._held.add(direction)

    def release(self, direction: str):
        with self._held_lock:
            self._held.discard(direction)

    def held(self) -> Set[str]:
        """Copy of the currently held directions."""
        with self._held_lock:
            return set(self._held)

    def _drain_events(self):
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return

            if event == TOGGLE_PAUSE:
                self.core.toggle_pause()
            elif event == RESTART:
                self.core.restart()
                if self.record_history:
                    self.history.append(self.core.snapshot().to_dict())
            elif event in VALID_MOVES:
                self.core.set_direction(event)
            else:
                logger.warning("Ignoring unknown input event %r", event)

    # --------------------------------------------------
    # Listeners
    # --------------------------------------------------

    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, snapshot: SimulationState):
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                # A failing renderer must not stop the simulation
                logger.exception("Listener %r failed: %s", listener, e)

    # --------------------------------------------------
    # Ticking
    # --------------------------------------------------

    def step(self) -> SimulationState:
        """Apply queued events, consult the player and run exactly one tick."""
        self._drain_events()

        move = None
        state = self.core.state
        if self.player is not None and not (state.is_paused or state.is_game_over):
            move = self.player.get_move(self.core.snapshot())

        if self.core.config.is_grid:
            if move is not None:
                self.core.set_direction(move)
            self.core.tick()
        else:
            held = self.held()
            if move is not None:
                held.add(move)
            self.core.tick(held)

        self.ticks_run += 1
        snapshot = self.core.snapshot()
        if self.record_history and not (state.is_paused or state.is_game_over):
            self.history.append(snapshot.to_dict())
        self._notify(snapshot)
        return snapshot

    def advance(self, elapsed: float) -> int:
        """
        Add elapsed seconds of frame time and run every whole tick that fits.

        Returns the number of ticks run. When more than max_catch_up ticks are
        owed the backlog is dropped instead of fast-forwarding the game.
        """
        self._accumulator += elapsed
        ticks = 0
        while self._accumulator >= self.tick_interval:
            if ticks >= self.max_catch_up:
                logger.debug("Dropping %.3fs of tick backlog", self._accumulator)
                self._accumulator = 0.0
                break
            self.step()
            self._accumulator -= self.tick_interval
            ticks += 1
        return ticks

    def run(
        self,
        max_ticks: Optional[int] = None,
        stop_on_game_over: bool = True,
        realtime: bool = True,
    ) -> SimulationState:
        """
        Tick until stopped, the game ends or max_ticks ticks have run.

        With realtime=False ticks run back to back (headless simulations).
        """
        self._running = True
        ticks = 0
        next_tick = self.clock()
        logger.info("Starting game %s (tick interval %.3fs)", self.game_id, self.tick_interval)

        while self._running:
            if max_ticks is not None and ticks >= max_ticks:
                break
            if stop_on_game_over and self.core.is_game_over:
                break

            if realtime:
                delay = next_tick - self.clock()
                if delay > 0:
                    self.sleep(delay)
                next_tick += self.tick_interval

            self.step()
            ticks += 1

        self._running = False
        return self.core.snapshot()

    def stop(self):
        """Stop the loop after the tick in progress."""
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # --------------------------------------------------
    # Replays
    # --------------------------------------------------

    def replay(self) -> Dict[str, Any]:
        """Recorded snapshots plus metadata as a JSON-serializable dict."""
        state = self.core.state
        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "config": self.core.config.to_dict(),
            "player": self.player.__class__.__name__ if self.player else None,
            "final_score": state.score,
            "ticks": state.tick_number,
            "is_game_over": state.is_game_over,
            "death_reason": state.death_reason,
        }
        return {"metadata": metadata, "frames": list(self.history)}

    def save_replay(self, filename: Optional[str] = None) -> str:
        """Write the replay JSON and return its path."""
        if filename is None:
            filename = os.path.join("completed_games", f"snake_game_{self.game_id}.json")

        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filename, "w") as f:
            json.dump(self.replay(), f, indent=2)

        logger.info("Saved replay with %d frames to %s", len(self.history), filename)
        return filename
