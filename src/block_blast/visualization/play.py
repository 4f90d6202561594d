from __future__ import annotations

import argparse
import os
from typing import Optional

import pygame

from block_blast.game import BlockBlastGame, GameConfig
from block_blast.persistence import BestScoreStore
from .controller import DragController, Layout
from .renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Blast with the mouse.")
    p.add_argument("--size", type=int, default=8)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=40)
    p.add_argument("--best-file", type=str, default="~/.block_blast/best.json")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    store = BestScoreStore(os.path.expanduser(args.best_file))
    game = BlockBlastGame(GameConfig(size=args.size, random_seed=args.seed), initial_best_score=store.load())
    layout = Layout(size=args.size, cell_size=args.cell_size, tray_slots=game.config.tray_size)
    controller = DragController(layout)
    saved_best = game.best_score

    pygame.init()
    try:
        screen = pygame.display.set_mode(layout.window_size)
        pygame.display.set_caption(f"Block Blast ({args.size}x{args.size})")
        renderer = Renderer(layout)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        controller.cancel()
                        game.reset()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    controller.press(*event.pos, game.get_snapshot())
                elif event.type == pygame.MOUSEMOTION:
                    controller.move(*event.pos, game)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    controller.release(game)

            snap = game.get_snapshot()
            if snap.best_score > saved_best:
                store.save(snap.best_score)
                saved_best = snap.best_score
            renderer.draw(screen, snap, controller.drag, controller.hover)
            clock.tick(60)
    finally:
        pygame.quit()
    print(f"Final score: {game.score}  Best: {game.best_score}")


def main() -> None:  # pragma: no cover
    run()


if __name__ == "__main__":  # pragma: no cover
    main()
