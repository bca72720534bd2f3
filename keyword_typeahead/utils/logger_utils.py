# logger_utils.py - for logging messages and performance metrics, timestamps etc

import logging
import os
import time

PACKAGE_LOGGER = "keyword_typeahead"

# Directory where log files go unless the config says otherwise
LOG_DIR = "logs"
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "typeahead.log")

LINE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
    }
    RESET = "\033[0m"

    def format(self, record):
        line = super().format(record)
        color = self.COLORS.get(record.levelname)
        return f"{color}{line}{self.RESET}" if color else line


class Log:
    """
    Wires the package logger to a log file (and optionally the console).
    Modules log through logging.getLogger(__name__); this only sets up handlers.
    The TUI must not echo to the console, it owns the terminal.
    """

    @staticmethod
    def setup(path=None, level="INFO", echo=False, use_color=True):
        path = path or DEFAULT_LOG_PATH
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LINE_FORMAT, DATE_FORMAT))
        logger.addHandler(fh)

        if echo:
            sh = logging.StreamHandler()
            fmt = ColorFormatter if use_color else logging.Formatter
            sh.setFormatter(fmt(LINE_FORMAT, DATE_FORMAT))
            logger.addHandler(sh)

        return logger

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric line (timing, counts) in the log.
        Example: lookup done: 0.123s
        """
        logging.getLogger(PACKAGE_LOGGER + ".metrics").info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("lookup"):
                await client.lookup_by_keyword(...)
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label):
        self.label = label
        self.start = time.time()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        dur = round(time.time() - self.start, 3)
        Log.metric(f"{self.label} done", dur, "s")
