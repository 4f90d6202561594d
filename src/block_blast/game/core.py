from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, FrozenSet, List, Mapping, Optional, Tuple, Union

import numpy as np

from .board import Board, LineClearResult, flat_index, is_coordinate
from .pieces import PieceId, RandomSource, get_piece, pick_random
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    size: int = 8
    random_seed: Optional[int] = None
    tray_size: int = 3


@dataclass(frozen=True)
class LastMove:
    piece_id: PieceId
    row: int
    col: int
    blocks_placed: int
    cleared: LineClearResult
    score_delta: int


@dataclass(frozen=True)
class PlacementPreview:
    """Cells a tray piece would cover at an anchor, for ghost highlighting."""

    row: int
    col: int
    cells: FrozenSet[int]  # in-bounds flat indices only
    valid: bool


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of the engine handed to renderers and input controllers.

    ``cells`` is a fresh flat row-major copy of the board; mutating it has no
    effect on the engine.
    """

    size: int
    cells: np.ndarray
    tray: Tuple[PieceId, ...]
    score: int
    best_score: int
    is_game_over: bool
    last_move: Optional[LastMove] = None

    def cell(self, row: int, col: int) -> int:
        if not (is_coordinate(row) and is_coordinate(col)):
            return 0
        if not (0 <= row < self.size and 0 <= col < self.size):
            return 0
        return int(self.cells[flat_index(self.size, row, col)])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameSnapshot):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.cells, other.cells)
            and self.tray == other.tray
            and self.score == other.score
            and self.best_score == other.best_score
            and self.is_game_over == other.is_game_over
            and self.last_move == other.last_move
        )


class BlockBlastGame:
    """Board + three-piece tray + scoring + game over.

    All mutators run to completion synchronously and are not reentrant.
    Failed placements return ``False`` and leave state untouched.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Union[ScoringRules, Mapping[str, Any], None] = None,
        rng: Optional[RandomSource] = None,
        initial_best_score: float = 0,
    ) -> None:
        self.config = config or GameConfig()
        if self.config.tray_size <= 0:
            raise ValueError(f"tray size must be positive, got {self.config.tray_size}")
        if isinstance(rules, ScoringRules):
            self._rules = rules
        else:
            self._rules = ScoringRules.with_overrides(rules)
        self._rng: RandomSource = rng or random.Random(self.config.random_seed).random
        self.board = Board(self.config.size)
        self._tray: List[PieceId] = []
        self._score = 0
        self._best_score = 0
        self._game_over = False
        self._last_move: Optional[LastMove] = None
        self.moves = 0
        self.lines_cleared_total = 0
        self.set_best_score(initial_best_score)
        self.reset()

    def reset(self) -> None:
        self.board.reset()
        self._score = 0
        self._last_move = None
        self.moves = 0
        self.lines_cleared_total = 0
        self._tray = self._draw_tray()
        # An empty board can still refuse a piece if size < 5
        self._game_over = self._compute_game_over()
        logger.debug("reset: tray=%s game_over=%s", self._tray, self._game_over)

    def _draw_tray(self) -> List[PieceId]:
        return [pick_random(self._rng) for _ in range(self.config.tray_size)]

    def _compute_game_over(self) -> bool:
        for piece_id in self._tray:
            if self.board.has_any_placement(get_piece(piece_id).shape):
                return False
        return True

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def rules(self) -> ScoringRules:
        return self._rules

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    @property
    def tray(self) -> Tuple[PieceId, ...]:
        return tuple(self._tray)

    @property
    def last_move(self) -> Optional[LastMove]:
        return self._last_move

    def get_snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            size=self.board.size,
            cells=self.board.snapshot(),
            tray=tuple(self._tray),
            score=self._score,
            best_score=self._best_score,
            is_game_over=self._game_over,
            last_move=self._last_move,
        )

    def _slot_piece(self, slot: int) -> Optional[PieceId]:
        if not is_coordinate(slot):
            return None
        if not 0 <= slot < len(self._tray):
            return None
        return self._tray[slot]

    def try_place_at(self, slot: int, row: int, col: int) -> bool:
        """Place the tray piece in ``slot`` with its top-left at (row, col)."""
        if self._game_over:
            return False
        piece_id = self._slot_piece(slot)
        if piece_id is None:
            logger.debug("rejected: no piece in slot %r", slot)
            return False
        if not (is_coordinate(row) and is_coordinate(col)):
            logger.debug("rejected: non-integer anchor (%r, %r)", row, col)
            return False
        piece = get_piece(piece_id)
        if not self.board.can_place(piece.shape, row, col):
            logger.debug("rejected: %s does not fit at (%d, %d)", piece_id.value, row, col)
            return False

        blocks_placed = self.board.place(piece.shape, row, col)
        cleared = self.board.clear_full_lines()
        delta = self._rules.score_for_move(blocks_placed, cleared)
        self._score += delta
        if self._score > self._best_score:
            self._best_score = self._score
        if cleared.lines:
            logger.debug(
                "cleared rows=%s cols=%s cells=%d", cleared.cleared_rows, cleared.cleared_cols, cleared.cleared_count
            )

        del self._tray[slot]
        if not self._tray:
            self._tray = self._draw_tray()
            logger.debug("tray refilled: %s", self._tray)

        self._last_move = LastMove(
            piece_id=piece_id,
            row=row,
            col=col,
            blocks_placed=blocks_placed,
            cleared=cleared,
            score_delta=delta,
        )
        self.moves += 1
        self.lines_cleared_total += cleared.lines
        self._game_over = self._compute_game_over()
        if self._game_over:
            logger.debug("game over: score=%d best=%d", self._score, self._best_score)
        return True

    def set_best_score(self, value: float) -> None:
        """Seed the best score, typically from persisted storage.

        Negative, non-finite or non-numeric values are ignored. The result never
        drops below the running score.
        """
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            best = int(value)
        else:
            try:
                value = float(value)
            except (TypeError, ValueError, OverflowError):
                return
            if not math.isfinite(value):
                return
            best = int(math.floor(value))
        if best < 0:
            return
        self._best_score = max(best, self._score)

    def preview(self, slot: int, row: int, col: int) -> Optional[PlacementPreview]:
        piece_id = self._slot_piece(slot)
        if piece_id is None or not (is_coordinate(row) and is_coordinate(col)):
            return None
        piece = get_piece(piece_id)
        size = self.board.size
        cells = set()
        for dr, dc in piece.cells():
            rr, cc = row + dr, col + dc
            if 0 <= rr < size and 0 <= cc < size:
                cells.add(flat_index(size, rr, cc))
        valid = not self._game_over and self.board.can_place(piece.shape, row, col)
        return PlacementPreview(row=row, col=col, cells=frozenset(cells), valid=valid)

    def valid_moves(self) -> List[Tuple[int, int, int]]:
        """All (slot, row, col) that ``try_place_at`` would accept."""
        if self._game_over:
            return []
        moves: List[Tuple[int, int, int]] = []
        for slot, piece_id in enumerate(self._tray):
            for r, c in self.board.valid_anchors(get_piece(piece_id).shape):
                moves.append((slot, r, c))
        return moves

    def __str__(self) -> str:
        tray = " ".join(p.value for p in self._tray)
        return f"{self.board}\nscore={self._score} best={self._best_score} tray=[{tray}]"
