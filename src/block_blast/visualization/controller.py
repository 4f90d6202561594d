from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from block_blast.game import BlockBlastGame, GameSnapshot, PieceId, PlacementPreview


@dataclass(frozen=True)
class Layout:
    """Pixel geometry shared by the renderer and the drag controller."""

    size: int = 8
    cell_size: int = 40
    margin: int = 20
    header: int = 40
    tray_slots: int = 3

    @property
    def board_origin(self) -> Tuple[int, int]:
        return self.margin, self.margin + self.header

    @property
    def board_px(self) -> int:
        return self.size * self.cell_size

    @property
    def tray_cell(self) -> int:
        return max(8, self.cell_size // 2)

    @property
    def tray_top(self) -> int:
        return self.board_origin[1] + self.board_px + self.margin

    @property
    def slot_px(self) -> int:
        # Pieces are at most 5 cells on a side.
        return 5 * self.tray_cell + self.margin

    @property
    def window_size(self) -> Tuple[int, int]:
        width = max(self.board_px, self.tray_slots * self.slot_px) + 2 * self.margin
        height = self.tray_top + 5 * self.tray_cell + self.margin
        return width, height

    def slot_origin(self, slot: int) -> Tuple[int, int]:
        return self.margin + slot * self.slot_px, self.tray_top

    def tray_slot_at(self, x: int, y: int) -> Optional[int]:
        if not (self.tray_top <= y < self.tray_top + 5 * self.tray_cell):
            return None
        slot, offset = divmod(x - self.margin, self.slot_px)
        if x < self.margin or slot >= self.tray_slots or offset >= 5 * self.tray_cell:
            return None
        return int(slot)

    def hit_test(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Board (row, col) under a pixel, clamped to the board edge; None if outside."""
        ox, oy = self.board_origin
        if not (ox <= x <= ox + self.board_px and oy <= y <= oy + self.board_px):
            return None
        col = (x - ox) // self.cell_size
        row = (y - oy) // self.cell_size
        last = self.size - 1
        return min(max(row, 0), last), min(max(col, 0), last)


@dataclass
class Drag:
    slot: int
    piece_id: PieceId
    x: int
    y: int
    # Grab point inside the piece, in board-cell pixels
    offset_x: int = 0
    offset_y: int = 0

    @property
    def ghost_origin(self) -> Tuple[int, int]:
        return self.x - self.offset_x, self.y - self.offset_y


class DragController:
    """Turns pointer events into ``try_place_at`` calls. Holds no game rules."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.drag: Optional[Drag] = None
        self.hover: Optional[PlacementPreview] = None

    def press(self, x: int, y: int, snapshot: GameSnapshot) -> bool:
        if self.drag is not None or snapshot.is_game_over:
            return False
        slot = self.layout.tray_slot_at(x, y)
        if slot is None or slot >= len(snapshot.tray):
            return False
        sx, sy = self.layout.slot_origin(slot)
        scale = self.layout.cell_size / self.layout.tray_cell
        self.drag = Drag(
            slot=slot,
            piece_id=snapshot.tray[slot],
            x=x,
            y=y,
            offset_x=int((x - sx) * scale),
            offset_y=int((y - sy) * scale),
        )
        self.hover = None
        return True

    def move(self, x: int, y: int, game: BlockBlastGame) -> Optional[PlacementPreview]:
        if self.drag is None:
            return None
        self.drag.x, self.drag.y = x, y
        hit = self.layout.hit_test(x, y)
        if hit is None:
            self.hover = None
        else:
            self.hover = game.preview(self.drag.slot, *hit)
        return self.hover

    def release(self, game: BlockBlastGame) -> bool:
        if self.drag is None:
            return False
        placed = False
        if self.hover is not None and self.hover.valid:
            placed = game.try_place_at(self.drag.slot, self.hover.row, self.hover.col)
        self.cancel()
        return placed

    def cancel(self) -> None:
        self.drag = None
        self.hover = None
