import logging
import copy
from src.utils.colors import Colors


class ColoredFormatter(logging.Formatter):
    """
    Custom formatter to add colors to log levels and specific messages.
    Highlights finished evaluations and dims stage-level detail.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GREY,
        logging.INFO: Colors.BLUE,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED
    }

    def format(self, record):
        # Work on a copy so file handlers never receive ANSI codes
        record = copy.copy(record)

        color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"

        if isinstance(record.msg, str):
            if record.msg.startswith("Evaluation complete"):
                record.msg = f"{Colors.GREEN}{record.msg}{Colors.RESET}"
            elif record.msg.startswith("Evaluating flight scenario"):
                record.msg = f"{Colors.MAGENTA}{Colors.BOLD}{record.msg}{Colors.RESET}"
            elif record.levelno == logging.DEBUG:
                record.msg = f"{Colors.GREY}{record.msg}{Colors.RESET}"

        return super().format(record)
