# src/hatetris/game/session.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from hatetris.game.core.engine import Engine
from hatetris.game.core.types import CoreState, Move, WellState
from hatetris.strategies.base import EnemyStrategy, invoke_strategy
from hatetris.utils.logging import setup_logger

LOG = setup_logger(name="hatetris.session", use_rich=True, level="info")

FIRST_PIECE_FAILED = (
    "Caught this exception while trying to generate the first piece using your custom enemy AI. Game abandoned."
)
NEW_PIECE_FAILED = (
    "Caught this exception while trying to generate a new piece using your custom AI. Game halted."
)


class Session:
    """
    One game between a player (moves) and an enemy strategy (pieces).

    Contracts:

      - history[i] is the WellState after i moves; moves[i] is the move that
        led from history[i] to history[i+1].
      - Moves past the end of history extend it; a move that differs from the
        logged one at the current position truncates the future first.
      - The game is over once any cell is set in row bar-1. Moves are then
        ignored until undo().
      - A StrategyError propagates to the caller and leaves the session exactly
        as it was before the failing call.
    """

    def __init__(self, engine: Engine, strategy: EnemyStrategy) -> None:
        self.engine = engine
        self.strategy = strategy
        self._history: List[WellState] = []
        self._moves: List[Move] = []
        self._index: int = -1

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    @property
    def started(self) -> bool:
        return self._index >= 0

    @property
    def state(self) -> WellState:
        if not self.started:
            raise RuntimeError("Session.start() must be called first")
        return self._history[self._index]

    @property
    def score(self) -> int:
        return int(self.state.core.score)

    @property
    def is_over(self) -> bool:
        return self.engine.is_game_over(self.state.core)

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    @property
    def position(self) -> int:
        return self._index

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def start(self) -> WellState:
        first_core = self.engine.empty_core()
        shape_id, ai_state = self._next_piece(first_core, None, interpretation=FIRST_PIECE_FAILED)

        first = WellState(core=first_core, ai=ai_state, piece=self.engine.spawn(shape_id))
        self._history = [first]
        self._moves = []
        self._index = 0
        return first

    def move(self, move: Move | str) -> WellState:
        m = Move.parse(move)
        if self.is_over:
            LOG.warning("Ignoring event %s because the game is over", m.value)
            return self.state

        index = self._index
        next_index = index + 1

        if index < len(self._moves) and self._moves[index] is m:
            moves = self._moves
            history = self._history
        else:
            moves = self._moves[:index] + [m]
            history = self._history[: index + 1]

        if next_index < len(history):
            next_ws = history[next_index]
        else:
            current = history[index]
            piece, core = self.engine.apply(current.core, current.piece, m)
            next_ws = WellState(core=core, ai=current.ai, piece=piece)

            if next_ws.piece is None and not self.engine.is_game_over(next_ws.core):
                shape_id, ai_state = self._next_piece(next_ws.core, next_ws.ai, interpretation=NEW_PIECE_FAILED)
                next_ws = WellState(core=next_ws.core, ai=ai_state, piece=self.engine.spawn(shape_id))

            history = history + [next_ws]

        if self.engine.is_game_over(next_ws.core) and not self.engine.is_game_over(history[index].core):
            LOG.info("Game over with score %d after %d moves", next_ws.core.score, next_index)

        self._moves = list(moves)
        self._history = list(history)
        self._index = next_index
        return next_ws

    def undo(self) -> Optional[WellState]:
        if self._index - 1 < 0:
            LOG.warning("Ignoring undo event because start of history has been reached")
            return None
        self._index -= 1
        return self.state

    def redo(self) -> Optional[WellState]:
        if not self.started or self._index >= len(self._moves):
            LOG.warning("Ignoring redo event because end of history has been reached")
            return None
        return self.move(self._moves[self._index])

    def replay(self, moves: Iterable[Move | str]) -> WellState:
        """Start a fresh game and play the given moves in order."""
        self.start()
        for m in moves:
            self.move(m)
        return self.state

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    def _next_piece(self, core: CoreState, ai_state: Any, *, interpretation: str) -> Tuple[str, Any]:
        return invoke_strategy(
            self.strategy,
            core=core,
            ai_state=ai_state,
            get_next_core_states=self.engine.bind_enumerate(),
            shape_ids=self.engine.shape_ids,
            interpretation=interpretation,
        )


__all__ = ["Session", "FIRST_PIECE_FAILED", "NEW_PIECE_FAILED"]
