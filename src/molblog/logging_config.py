"""
Logging Configuration
Sets up the package logger and RDKit's own console log.
"""
import logging
import sys
from typing import Optional

from rdkit import RDLogger


def set_rdkit_logging(enabled: bool) -> None:
    """
    RDKit prints parse errors straight to stderr; those are already captured in
    reports and warnings, so they are silenced unless debugging.
    """
    if enabled:
        RDLogger.EnableLog("rdApp.*")
    else:
        RDLogger.DisableLog("rdApp.*")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'molblog' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("molblog")
    logger.setLevel(level)

    # avoid duplicate handlers (and leaked log files) on repeated setup
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stdout is reserved for CLI output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    set_rdkit_logging(level <= logging.DEBUG)
    logger.debug("Logging initialized.")
