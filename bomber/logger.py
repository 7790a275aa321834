"""
Logging system for the Bomberman engine

Handlers are installed by main.setup_logging(); these wrappers only
name the channels and tag gameplay messages.
"""
import logging


class SystemLogger:
    """System-level logger for technical messages"""

    def __init__(self):
        self.logger = logging.getLogger("system")

    def info(self, message):
        self.logger.info(message)

    def error(self, message):
        self.logger.error(message)

    def warning(self, message):
        self.logger.warning(message)


class GameLogger:
    """Game-level logger for gameplay messages with emojis"""

    def __init__(self):
        self.logger = logging.getLogger("game")

    def bomb(self, message):
        """Log bomb plants"""
        self.logger.info(f"💣 {message}")

    def blast(self, message):
        """Log explosions"""
        self.logger.info(f"💥 {message}")

    def kill(self, message):
        """Log enemy kills"""
        self.logger.info(f"🎯 {message}")

    def death(self, message):
        """Log player death"""
        self.logger.info(f"💀 {message}")

    def exit(self, message):
        """Log exit door reveal"""
        self.logger.info(f"🚪 {message}")

    def movement(self, message):
        """Log movement actions"""
        self.logger.debug(f"➡️ {message}")

    def win(self, message):
        """Log level completion"""
        self.logger.info(f"🏆 {message}")
