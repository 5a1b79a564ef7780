import logging as _logging
from typing import Dict

from .config import RESULT_DIR, config


class _LoggerSetup:
    def __init__(self):
        self.logging_handlers: Dict[str, _logging.Handler] = dict()

        self._create_file_handler()
        self._create_stdout_handler()

    def _create_file_handler(self):
        if "file" in self.logging_handlers:
            return

        file_formatter = _logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s - [%(filename)s:%(lineno)d]"
        )

        # Define the log file path
        log_file_path = RESULT_DIR / "system.log"

        # Create and configure a file handler, DEBUG by default
        file_handler = _logging.FileHandler(log_file_path)
        file_level = _logging.getLevelName(str(config.logging.file_level).upper())
        file_handler.setLevel(file_level)
        file_handler.setFormatter(file_formatter)

        self.logging_handlers["file"] = file_handler

    def _create_stdout_handler(self):
        if "stdout" in self.logging_handlers:
            return

        stdout_formatter = _logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        # Create and configure a stream handler for STDOUT
        stdout_handler = _logging.StreamHandler()
        stdout_level = _logging.getLevelName(str(config.logging.stdout_level).upper())
        stdout_handler.setLevel(stdout_level)
        stdout_handler.setFormatter(stdout_formatter)

        self.logging_handlers["stdout"] = stdout_handler

    def setup_logger(self, name: str):
        # Save the current logger class
        current_logger_class = _logging.getLoggerClass()

        try:
            # Temporarily set the logger class to the default
            _logging.setLoggerClass(_logging.Logger)

            # Create the logger
            logger = _logging.getLogger(name)
            logger.setLevel(_logging.DEBUG)

            # Add handlers to the logger if they haven't been added yet
            if not logger.handlers:
                for handler in self.logging_handlers.values():
                    logger.addHandler(handler)
        finally:
            # Restore the original logger class
            _logging.setLoggerClass(current_logger_class)

        return logger


_LOGGER_SETUP = _LoggerSetup()
_ALL_LOGGERS = []
MAIN_LOGGER = _LOGGER_SETUP.setup_logger("MainLogger")


def setup_class_logger(cls):
    cls_name = cls.__name__
    mangled_logger_name = f"_{cls_name}__logger"
    class_logger = _LOGGER_SETUP.setup_logger(cls.__name__)
    _ALL_LOGGERS.append(class_logger)
    setattr(cls, mangled_logger_name, class_logger)
    return cls
