import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from src.config.settings import log_path


def setup_logger(log_path="feed_scheduler.log"):
    logger = logging.getLogger("feed_scheduler")
    if logger.handlers:  # already configured on a previous import
        return logger

    logger.setLevel(logging.DEBUG)  # capture everything; handlers filter

    # --- General log (INFO+) ---
    general_handler = RotatingFileHandler(
        log_path,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        delay=True,
    )
    general_handler.setLevel(logging.INFO)
    general_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s %(message)s")
    )

    # --- Warnings/errors log (WARNING+) ---
    head, tail = os.path.split(log_path)
    warning_handler = RotatingFileHandler(
        os.path.join(head, "warnings_" + tail),
        maxBytes=2 * 1024 * 1024,  # 2 MB
        backupCount=5,
        delay=True,
    )
    warning_handler.setLevel(logging.WARNING)
    warning_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(filename)s:%(lineno)d - %(message)s"
        )
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    )

    logger.addHandler(general_handler)
    logger.addHandler(warning_handler)
    logger.addHandler(console_handler)
    return logger


logger = setup_logger(log_path)
