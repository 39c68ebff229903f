"""
Main entry point for DOWNHILL.

Loads settings, builds the game, waits for its sprites and then runs
the pygame simulator window.
"""

import asyncio
import logging
import sys

from downhill.core.clock import FrameQueue
from downhill.core.events import Event, EventType
from downhill.core.game import Game
from downhill.exceptions import AssetLoadError
from downhill.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the game in a desktop window."""
    from downhill.simulator.window import SimulatorWindow, WindowConfig

    frame_queue = FrameQueue()
    game = Game(settings=settings, scheduler=frame_queue)

    # Nothing is drawn until every sprite is available
    await game.load()

    # Each window tick runs the frames the game asked for
    def on_tick(event: Event) -> None:
        frame_queue.run_pending()

    game.event_bus.subscribe(EventType.TICK, on_tick)

    window = SimulatorWindow(game, config=WindowConfig.from_settings(settings.display))
    game.start()

    await window.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("DOWNHILL starting...")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except AssetLoadError as e:
        logger.exception(f"Could not load game assets: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("DOWNHILL stopped")


if __name__ == "__main__":
    main()
