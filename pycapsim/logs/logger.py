# pycapsim/logs/logger.py

"""
File logging for simulation runs.
"""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(run_name: str, customer: str, log_dir: str = "logs",
               level: str = "INFO") -> logging.Logger:
    """
    Return the ``pycapsim`` logger writing to ``<log_dir>/<run_name>_<customer>.log``.

    Handlers are attached to the package logger, so records from the engine
    and the profile loader end up in the file. Calling again with the same
    file does not add a second handler.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, f"{run_name}_{customer}.log"))

    logger = logging.getLogger("pycapsim")
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
            return logger

    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
