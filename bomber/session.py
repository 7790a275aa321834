"""
Session: menu -> playing -> finished state machine and the polling loop

The session owns at most one Game. The presentation layer feeds it one
command per tick and renders whatever view/message it exposes.
"""
import random
import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from bomber.models import Command, DIRECTIONS
from bomber.state import GameState, GameStatus, GameView
from bomber.game import Game
from bomber.persistence import save_game, load_game
from bomber.errors import SaveError, LoadError
from bomber.table_logger import log_status_table
from bomber.logger import SystemLogger
from bomber.config import SAVE_FILE, TICK_DELAY, STATUS_LOG_INTERVAL
from utils.time import get_current_time, sleep as default_sleep

logger = logging.getLogger(__name__)
system_logger = SystemLogger()

NO_SAVED_GAME = "No saved game found. Press any key to continue."
SAVED = "Game saved successfully!"
SAVE_FAILED = "Unable to save game!"
GAME_OVER = "GAME OVER! "
MESSAGE_TICKS = 40  # how long an in-game message stays on screen


class SessionStatus(Enum):
    MENU = "menu"
    PLAYING = "playing"
    FINISHED = "finished"  # final screen shown, waiting for a key
    EXITED = "exited"


class GameSession:
    """Menu and game state machine for one process run"""

    def __init__(
        self,
        save_path: str = SAVE_FILE,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = get_current_time,
    ):
        self.save_path = save_path
        self.rng = rng or random.Random()
        self.clock = clock
        self.status = SessionStatus.MENU
        self.game: Optional[Game] = None
        self.message: str = ""  # one-shot text for the presentation layer

    @property
    def state(self) -> Optional[GameState]:
        return self.game.state if self.game else None

    def view(self) -> Optional[GameView]:
        return self.game.state.view() if self.game else None

    def take_message(self) -> str:
        message, self.message = self.message, ""
        return message

    def start(self, state: GameState):
        self.game = Game(state, rng=self.rng, clock=self.clock)
        self.status = SessionStatus.PLAYING

    def select(self, command: Command) -> SessionStatus:
        """Handle a menu choice: 1 new game, 2 load, 3 exit"""
        if self.status != SessionStatus.MENU:
            return self.status

        if command == Command.MENU_NEW:
            system_logger.info("Starting a new game")
            self.start(GameState.new(self.rng))
        elif command == Command.MENU_LOAD:
            try:
                state = load_game(self.save_path, clock=self.clock)
            except LoadError as e:
                logger.info(f"Load failed: {e}")
                self.message = NO_SAVED_GAME
            else:
                self.start(state)
        elif command == Command.MENU_EXIT:
            self.status = SessionStatus.EXITED
        return self.status

    def handle(self, command: Optional[Command]) -> SessionStatus:
        """Handle one in-game command (None = no input this tick)"""
        if self.status != SessionStatus.PLAYING or command is None:
            return self.status

        if command == Command.QUIT:
            system_logger.info("Quit requested")
            self.status = SessionStatus.EXITED
        elif command == Command.SAVE:
            try:
                save_game(self.game.state, self.save_path)
            except SaveError:
                self.message = SAVE_FAILED
            else:
                self.message = SAVED
        elif command in DIRECTIONS or command == Command.PLANT_BOMB:
            self.game.apply(command)
        return self.status

    def tick(self) -> SessionStatus:
        """Advance the running game by one tick"""
        if self.status != SessionStatus.PLAYING:
            return self.status

        status = self.game.update()
        if self.game.tick_count % STATUS_LOG_INTERVAL == 0:
            log_status_table(self.game.state, self.game.tick_count)

        if status == GameStatus.LOST:
            self.message = GAME_OVER + self.game.state.cause
            self.status = SessionStatus.FINISHED
        elif status == GameStatus.WON:
            self.message = self.game.state.cause
            self.status = SessionStatus.FINISHED
        if self.status == SessionStatus.FINISHED:
            system_logger.info(f"Game finished after {self.game.tick_count} ticks: {self.message}")
        return self.status

    def acknowledge(self) -> SessionStatus:
        """Dismiss the final screen; the session ends"""
        if self.status == SessionStatus.FINISHED:
            self.status = SessionStatus.EXITED
        return self.status


class Frontend(Protocol):
    """What run() needs from a presentation layer"""

    def show_menu(self, message: str) -> None: ...

    def wait_menu_choice(self) -> Optional[Command]: ...

    def poll(self) -> Optional[Command]: ...

    def render(self, view: GameView, message: str) -> None: ...

    def show_final(self, message: str) -> None: ...


def play(session: GameSession, frontend: Frontend, sleep: Callable[[float], None] = default_sleep,
         tick_delay: float = TICK_DELAY):
    """Polling loop for one game: render, input, tick, sleep"""
    message, message_ticks = "", 0
    while session.status == SessionStatus.PLAYING:
        frontend.render(session.view(), message if message_ticks > 0 else "")
        message_ticks -= 1
        session.handle(frontend.poll())
        session.tick()
        if session.status == SessionStatus.PLAYING and session.message:
            message, message_ticks = session.take_message(), MESSAGE_TICKS
        sleep(tick_delay)

    if session.status == SessionStatus.FINISHED:
        frontend.show_final(session.take_message())
        session.acknowledge()


def run(session: GameSession, frontend: Frontend, sleep: Callable[[float], None] = default_sleep,
        tick_delay: float = TICK_DELAY):
    """Menu loop; returns when the session has exited"""
    system_logger.info("Starting session...")
    while session.status != SessionStatus.EXITED:
        frontend.show_menu(session.take_message())
        choice = frontend.wait_menu_choice()
        if choice is None:
            continue
        session.select(choice)
        if session.status == SessionStatus.PLAYING:
            play(session, frontend, sleep=sleep, tick_delay=tick_delay)
    system_logger.info("Session ended")
