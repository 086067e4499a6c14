"""Runtime infrastructure for docsmith.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths, TMPDIR
- Settings loading via load_settings()
- Data-store access via PostgrestStore
- User-facing notifications via ErrorNotifier

Usage:
    from docsmith.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.exports)
"""

from docsmith.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from docsmith.runtime.notifications import ErrorNotifier, LoggingSink, NotificationSink, ToastRateLimiter
from docsmith.runtime.paths import (
    TMPDIR,
    ProjectPaths,
    get_paths,
    reset_paths,
)
from docsmith.runtime.settings import Settings, StoreSettings, load_settings
from docsmith.runtime.store import DocumentNotFound, DocumentStore, PostgrestStore, StoreError

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
    "TMPDIR",
    # Settings
    "load_settings",
    "Settings",
    "StoreSettings",
    # Data store
    "DocumentStore",
    "PostgrestStore",
    "StoreError",
    "DocumentNotFound",
    # Notifications
    "NotificationSink",
    "LoggingSink",
    "ErrorNotifier",
    "ToastRateLimiter",
]
