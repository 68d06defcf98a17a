"""Logging configuration for Prefill.

Every module logs through ``logging.getLogger(__name__)``, so all records live
under the ``prefill`` logger hierarchy.
"""

import logging
import os
import sys


def configure_logging(level=None, format_string=None):
    """Configure logging for Prefill.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
    """
    # Get level from environment or use default
    if level is None:
        level = os.environ.get("PREFILL_LOG_LEVEL", "INFO")

    # Convert string level to logging constant
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    if format_string is None:
        if numeric_level == logging.DEBUG:
            # More detailed format for debug mode
            format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            format_string = "%(asctime)s %(levelname)s: %(message)s"

    # Configure root logger
    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Replace any existing configuration
    )

    # Resolved defaults are reported at DEBUG by the engine
    logging.getLogger("prefill.engine").setLevel(numeric_level)

    if numeric_level == logging.DEBUG:
        logging.getLogger("prefill").setLevel(logging.DEBUG)
        logging.getLogger("prefill.exceptions").setLevel(logging.DEBUG)
    else:
        logging.getLogger("prefill.exceptions").setLevel(logging.WARNING)
