"""Game module for Block Blast.

Exports the core game engine and supporting classes:
- PieceId / PieceDef: the fixed catalog of piece shapes
- Board: flat square grid, placement checks and line clearing
- ScoringRules: scoring configuration and the per-move score formula
- BlockBlastGame: tray, scoring, game over and snapshots
"""

from .pieces import PIECE_INDEX, PIECE_LIST, PIECES, PieceDef, PieceId, get_piece, pick_random
from .board import Board, LineClearResult
from .rules import ScoringRules
from .core import BlockBlastGame, GameConfig, GameSnapshot, LastMove, PlacementPreview

__all__ = [
    "PIECE_INDEX",
    "PIECE_LIST",
    "PIECES",
    "PieceDef",
    "PieceId",
    "get_piece",
    "pick_random",
    "Board",
    "LineClearResult",
    "ScoringRules",
    "BlockBlastGame",
    "GameConfig",
    "GameSnapshot",
    "LastMove",
    "PlacementPreview",
]
