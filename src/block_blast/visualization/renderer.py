from __future__ import annotations

from typing import Optional, Tuple

import pygame

from block_blast.game import GameSnapshot, PlacementPreview, get_piece
from .controller import Drag, Layout


BACKGROUND = (11, 11, 11)
EMPTY = (28, 28, 28)
FILLED = (90, 209, 255)
PREVIEW_VALID = (76, 255, 122)
PREVIEW_INVALID = (255, 76, 76)
TEXT = (230, 230, 230)


def _cell_color(filled: bool, preview: Optional[PlacementPreview], index: int) -> Tuple[int, int, int]:
    if preview is not None and index in preview.cells:
        return PREVIEW_VALID if preview.valid else PREVIEW_INVALID
    return FILLED if filled else EMPTY


class Renderer:
    """Draws a snapshot. Never touches the engine."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.font = pygame.font.SysFont(None, 28)

    def _draw_board(self, screen: pygame.Surface, snap: GameSnapshot, preview: Optional[PlacementPreview]) -> None:
        ox, oy = self.layout.board_origin
        cs = self.layout.cell_size
        for i, v in enumerate(snap.cells):
            row, col = divmod(i, snap.size)
            rect = pygame.Rect(ox + col * cs, oy + row * cs, cs - 2, cs - 2)
            pygame.draw.rect(screen, _cell_color(bool(v), preview, i), rect, border_radius=6)

    def _draw_tray(self, screen: pygame.Surface, snap: GameSnapshot, drag: Optional[Drag]) -> None:
        tc = self.layout.tray_cell
        for slot, piece_id in enumerate(snap.tray):
            if drag is not None and drag.slot == slot:
                continue
            x0, y0 = self.layout.slot_origin(slot)
            color = FILLED if not snap.is_game_over else EMPTY
            for dr, dc in get_piece(piece_id).cells():
                rect = pygame.Rect(x0 + dc * tc, y0 + dr * tc, tc - 1, tc - 1)
                pygame.draw.rect(screen, color, rect, border_radius=3)

    def _draw_ghost(self, screen: pygame.Surface, drag: Drag) -> None:
        cs = self.layout.cell_size
        gx, gy = drag.ghost_origin
        ghost = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        for dr, dc in get_piece(drag.piece_id).cells():
            rect = pygame.Rect(gx + dc * cs, gy + dr * cs, cs - 2, cs - 2)
            pygame.draw.rect(ghost, FILLED + (160,), rect, border_radius=6)
        screen.blit(ghost, (0, 0))

    def draw(
        self,
        screen: pygame.Surface,
        snap: GameSnapshot,
        drag: Optional[Drag] = None,
        preview: Optional[PlacementPreview] = None,
    ) -> None:
        screen.fill(BACKGROUND)
        header = self.font.render(f"Score: {snap.score}    Best: {snap.best_score}", True, TEXT)
        screen.blit(header, (self.layout.margin, self.layout.margin))
        self._draw_board(screen, snap, preview)
        self._draw_tray(screen, snap, drag)
        if drag is not None and preview is None:
            self._draw_ghost(screen, drag)
        if snap.is_game_over:
            over = self.font.render("Game Over - press N to restart", True, PREVIEW_INVALID)
            rect = over.get_rect(center=(screen.get_width() // 2, self.layout.tray_top - self.layout.margin // 2))
            screen.blit(over, rect)
        pygame.display.flip()
