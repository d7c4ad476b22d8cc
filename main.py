"""
main.py — Entry point and game loop for Hexa.

Responsibilities:
    - Configure logging from HEXA_LOG_LEVEL
    - Open the key-value store in the data directory
    - Initialise pygame and create the window
    - Run the main loop: handle events → update → render → flip
    - Wrap the loop in async for pygbag (WASM export)

main.py is intentionally thin. It owns the pygame lifecycle and the
window; every rule of the game lives in core/engine.py, and core/game.py
translates input into engine calls. The engine's 1 Hz countdown is driven
from here by passing each frame's dt down through Game.update().

Usage (local):
    python main.py

    HEXA_DATA_DIR=/tmp/hexa HEXA_LOG_LEVEL=DEBUG python main.py
"""

import asyncio
import logging
import os

import pygame

from core.config import store_path
from core.game import Game
from core.storage import JsonStore
from settings import SCREEN_W, SCREEN_H, FPS, TITLE, LOG_LEVEL_ENV, LOG_FORMAT

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def main() -> None:
    """Async main loop, compatible with both CPython and pygbag.

    Each iteration yields to the event loop via asyncio.sleep(0), which
    pygbag uses to hand control back to the browser.
    """
    configure_logging()
    store = JsonStore(store_path())
    logger.info("Using store %s", store.path)

    pygame.init()
    window = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption(TITLE)

    clock = pygame.time.Clock()
    game = Game(store)
    game.start_menu()

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0   # seconds since last frame
        dt = min(dt, 0.25)              # a stalled frame must not eat several seconds at once

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.KEYDOWN):
                game.handle_event(event)

        game.update(dt)
        game.render(window)
        pygame.display.flip()

        await asyncio.sleep(0)

    pygame.quit()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
