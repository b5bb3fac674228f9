import logging
import os
from logging.handlers import RotatingFileHandler
from microbreaks.core.config import settings

class LoggerConfig:
    """
    Sets up the service logger: console output always, plus a rotating
    file under LOG_DIRECTORY unless LOG_TO_FILE is disabled.
    """
    def __init__(
        self, env=20, logger_name="MicroBreaks", log_directory="logs",
        log_file="app.log", to_file=True
    ):
        self.logger_name = logger_name
        self.log_directory = os.path.abspath(log_directory)
        self.log_file_path = os.path.join(self.log_directory, log_file)
        self.env = env
        self.to_file = to_file
        self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        self.logger = logging.getLogger(self.logger_name)
        self.setup_logger()

    def _build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if self.to_file:
            try:
                os.makedirs(self.log_directory, exist_ok=True)
                handlers.append(RotatingFileHandler(
                    self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
                ))
            except OSError as e:
                # Read-only filesystems still get console logs
                print(f"File logging disabled, cannot write to {self.log_directory}: {e}")
        return handlers

    def setup_logger(self):
        formatter = logging.Formatter(self.log_format)

        # Avoid adding duplicate handlers if re-initialized
        if not self.logger.handlers:
            for handler in self._build_handlers():
                handler.setLevel(self.env)
                handler.setFormatter(formatter)
                self.logger.addHandler(handler)

        self.logger.setLevel(self.env)

    def log(self, level: int, message: str, extra: dict = None):
        """Log a message, appending `extra` as key=value pairs."""
        if extra:
            fields = " ".join(f"{key}={value}" for key, value in extra.items())
            message = f"{message} | {fields}"
        self.logger.log(level, message)

# Initialize Logger
logs = LoggerConfig(
    env=settings.LOGGER,
    logger_name="MICRO-BREAKS",
    log_directory=settings.LOG_DIRECTORY,
    log_file="app.log",
    to_file=settings.LOG_TO_FILE
)
