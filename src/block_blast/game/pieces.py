from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Tuple

import numpy as np


class PieceId(str, Enum):
    DOT = "DOT"
    I2_H = "I2_H"
    I3_H = "I3_H"
    I4_H = "I4_H"
    I5_H = "I5_H"
    I2_V = "I2_V"
    I3_V = "I3_V"
    I4_V = "I4_V"
    I5_V = "I5_V"
    O2 = "O2"
    O3 = "O3"
    R2X3 = "R2x3"
    R3X2 = "R3x2"
    L3 = "L3"
    L3_MIRROR = "L3_MIRROR"
    L4 = "L4"
    L4_MIRROR = "L4_MIRROR"
    L5 = "L5"
    L5_MIRROR = "L5_MIRROR"
    T4_UP = "T4_UP"
    T4_DOWN = "T4_DOWN"
    T4_LEFT = "T4_LEFT"
    T4_RIGHT = "T4_RIGHT"
    S4_H = "S4_H"
    S4_V = "S4_V"
    Z4_H = "Z4_H"
    Z4_V = "Z4_V"
    PLUS5 = "PLUS5"
    STEP4_UP = "STEP4_UP"
    STEP4_DOWN = "STEP4_DOWN"
    STEP5_UP = "STEP5_UP"
    STEP5_DOWN = "STEP5_DOWN"


Shape = np.ndarray
RandomSource = Callable[[], float]


def _frozen_shape(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.flags.writeable = False
    return shape


@dataclass(frozen=True)
class PieceDef:
    """A fixed piece shape. Origin is the top-left of the matrix."""

    id: PieceId
    shape: Shape = field(compare=False)
    block_count: int

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def cells(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.shape))]


def _def(piece_id: PieceId, rows: List[List[int]]) -> PieceDef:
    shape = _frozen_shape(rows)
    return PieceDef(id=piece_id, shape=shape, block_count=int(np.count_nonzero(shape)))


# No runtime rotation: each orientation is its own variant.
PIECE_LIST: Tuple[PieceDef, ...] = (
    _def(PieceId.DOT, [[1]]),
    # Lines
    _def(PieceId.I2_H, [[1, 1]]),
    _def(PieceId.I3_H, [[1, 1, 1]]),
    _def(PieceId.I4_H, [[1, 1, 1, 1]]),
    _def(PieceId.I5_H, [[1, 1, 1, 1, 1]]),
    _def(PieceId.I2_V, [[1], [1]]),
    _def(PieceId.I3_V, [[1], [1], [1]]),
    _def(PieceId.I4_V, [[1], [1], [1], [1]]),
    _def(PieceId.I5_V, [[1], [1], [1], [1], [1]]),
    # Squares & rectangles
    _def(PieceId.O2, [[1, 1], [1, 1]]),
    _def(PieceId.O3, [[1, 1, 1], [1, 1, 1], [1, 1, 1]]),
    _def(PieceId.R2X3, [[1, 1, 1], [1, 1, 1]]),
    _def(PieceId.R3X2, [[1, 1], [1, 1], [1, 1]]),
    # L / J
    _def(PieceId.L3, [[1, 0], [1, 1]]),
    _def(PieceId.L3_MIRROR, [[0, 1], [1, 1]]),
    _def(PieceId.L4, [[1, 0], [1, 0], [1, 1]]),
    _def(PieceId.L4_MIRROR, [[0, 1], [0, 1], [1, 1]]),
    _def(PieceId.L5, [[1, 0], [1, 0], [1, 0], [1, 1]]),
    _def(PieceId.L5_MIRROR, [[0, 1], [0, 1], [0, 1], [1, 1]]),
    # T
    _def(PieceId.T4_UP, [[1, 1, 1], [0, 1, 0]]),
    _def(PieceId.T4_DOWN, [[0, 1, 0], [1, 1, 1]]),
    _def(PieceId.T4_LEFT, [[1, 0], [1, 1], [1, 0]]),
    _def(PieceId.T4_RIGHT, [[0, 1], [1, 1], [0, 1]]),
    # S / Z
    _def(PieceId.S4_H, [[0, 1, 1], [1, 1, 0]]),
    _def(PieceId.S4_V, [[1, 0], [1, 1], [0, 1]]),
    _def(PieceId.Z4_H, [[1, 1, 0], [0, 1, 1]]),
    _def(PieceId.Z4_V, [[0, 1], [1, 1], [1, 0]]),
    _def(PieceId.PLUS5, [[0, 1, 0], [1, 1, 1], [0, 1, 0]]),
    # Stairs
    _def(PieceId.STEP4_UP, [[1, 1, 0], [0, 1, 1]]),
    _def(PieceId.STEP4_DOWN, [[0, 1, 1], [1, 1, 0]]),
    _def(PieceId.STEP5_UP, [[1, 1, 0], [0, 1, 0], [0, 1, 1]]),
    _def(PieceId.STEP5_DOWN, [[0, 1, 1], [0, 1, 0], [1, 1, 0]]),
)

PIECES: Dict[PieceId, PieceDef] = {p.id: p for p in PIECE_LIST}

PIECE_INDEX: Dict[PieceId, int] = {p.id: i for i, p in enumerate(PIECE_LIST)}


def get_piece(piece_id: PieceId | str) -> PieceDef:
    return PIECES[PieceId(piece_id)]


def pick_random(rng: RandomSource) -> PieceId:
    """Draw one id uniformly from the whole catalog.

    Every call is independent; there is no bag. ``rng`` returns a float in [0, 1).
    """
    idx = int(rng() * len(PIECE_LIST))
    idx = min(max(idx, 0), len(PIECE_LIST) - 1)
    return PIECE_LIST[idx].id
