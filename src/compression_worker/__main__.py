import asyncio
import signal

from .service import CompressionService
from .settings import load_settings
from .utils import setup_logger


async def main():
    """
    Runs the compression worker until SIGINT/SIGTERM.
    """
    settings = load_settings()
    logger = setup_logger(settings.logging)
    service = CompressionService.from_settings(settings)

    loop = asyncio.get_running_loop()

    # Resolved by the signal handler
    stop_event = asyncio.Event()

    def handle_shutdown(s):
        logger.info(f"Received exit signal {s.name}...")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_shutdown, sig)

    await service.start()
    try:
        await stop_event.wait()
    finally:
        await service.stop()
        logger.info("Main exited.")


def run():
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    run()
