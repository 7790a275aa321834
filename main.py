"""
Entry point for the terminal Bomberman game

Environment variables:
    SAVE_FILE: save slot path (default: game_save.txt)
    TICK_DELAY: seconds between ticks (default: 0.05)
    LOG_DIR / LOG_LEVEL: log file location and level
    RANDOM_SEED: fixed seed for arena generation
"""
import os
import sys
import time
import curses
import random
import logging

from bomber.config import LOG_DIR, LOG_LEVEL, RANDOM_SEED, SAVE_FILE
from bomber.session import GameSession, run
from bomber.terminal import TerminalFrontend

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'

logger = logging.getLogger(__name__)


def setup_logging():
    """Log to a per-run file; the terminal itself belongs to curses"""
    os.makedirs(LOG_DIR, exist_ok=True)
    log_file = os.path.join(LOG_DIR, f"bomber_{int(time.time())}.log")
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[logging.FileHandler(log_file, encoding="utf-8")]
    )
    return log_file


def _run(stdscr):
    session = GameSession(save_path=SAVE_FILE, rng=random.Random(RANDOM_SEED))
    run(session, TerminalFrontend(stdscr))


def main():
    """Main entry point"""
    log_file = setup_logging()
    logger.info(f"Starting game, save slot {SAVE_FILE}, log {log_file}")
    if RANDOM_SEED is not None:
        logger.info(f"Using fixed seed {RANDOM_SEED}")

    try:
        curses.wrapper(_run)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    sys.exit(0)


if __name__ == "__main__":
    main()
