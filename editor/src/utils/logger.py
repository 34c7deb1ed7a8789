"""Global logging setup and boundary tracing helpers"""
import logging
import sys

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=None):
    """Configure root logging once for the editor process

    Args:
        level: Logging level name or number. Defaults to DEBUG when running
            from source and WARNING when packaged.
    """
    if level is None:
        level = logging.DEBUG if DEBUG_MODE else logging.WARNING
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)  # Output to console
        ]
    )


def log_rejected(logger, action, mask_id=None, reason=''):
    """Trace a user operation that was silently rejected

    Rejections are expected (locked masks, stale drag events, out-of-range
    indices), so they go to DEBUG rather than WARNING.

    Returns:
        False, so callers can `return log_rejected(...)`
    """
    logger.debug(f"[{action}] rejected (mask={mask_id}): {reason}")
    return False
