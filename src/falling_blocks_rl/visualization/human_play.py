from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks_rl.game import Action, FallingBlockGame, GameConfig
from falling_blocks_rl.game.timing import TickCallback
from falling_blocks_rl.utils.logging import setup_logger
from .renderer import Renderer

logger = logging.getLogger(__name__)

DROP_EVENT = pygame.USEREVENT + 1

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


class PygameDropTimer:
    """Drop scheduler backed by a repeating pygame timer event."""

    def __init__(self, event_type: int = DROP_EVENT) -> None:
        self.event_type = event_type
        self._callback: Optional[TickCallback] = None

    def schedule(self, interval_ms: int, callback: TickCallback) -> None:
        self._callback = callback
        # set_timer replaces any running timer for the same event type
        pygame.time.set_timer(self.event_type, int(interval_ms))

    def cancel(self) -> None:
        self._callback = None
        pygame.time.set_timer(self.event_type, 0)

    def handle(self, event: pygame.event.Event) -> bool:
        if event.type != self.event_type or self._callback is None:
            return False
        self._callback()
        return True


def handle_key(game: FallingBlockGame, key: int) -> bool:
    """Apply one key press. Returns False when the player asked to quit.

    The first game only begins once R is pressed; R also restarts at any time.
    """
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_r:
        logger.info("starting new game")
        game.start()
        return True
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        game.step(action)
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play falling blocks with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(seed: Optional[int] = None, cell_size: int = 28, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        timer = PygameDropTimer()
        game = FallingBlockGame(GameConfig(random_seed=seed), scheduler=timer)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Blocks - Human Play")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif timer.handle(event):
                    continue
                elif event.type == pygame.KEYDOWN:
                    if not handle_key(game, event.key):
                        running = False

            renderer.draw(screen, game.get_state(), game.snapshot())
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks_rl", level=args.log_level)
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
