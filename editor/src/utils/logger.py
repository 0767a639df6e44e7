"""Global logging and error handling utilities for the collage editor"""
import logging
import sys
import traceback
from PyQt5.QtWidgets import QMessageBox

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

logger = logging.getLogger('CollageEditor')

_main_window = None


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions from UI slots with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the user message with the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    logger.error(f"{user_message or 'Unhandled error'}\n{traceback.format_exc()}")

    message = user_message if user_message else str(e)
    if _main_window is not None:
        QMessageBox.critical(_main_window, title, message)
    else:
        # No window yet (startup, tests)
        print(f"ERROR POPUP (no window): {title} - {message}", file=sys.stderr)
    raise e
