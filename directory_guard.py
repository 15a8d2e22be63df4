"""
Clears the staging or published image directories before an upload batch.
Uploads replace the whole asset set of a mode; they are never incremental.
"""

import logging
import threading
from contextlib import contextmanager

from errors import FatalIOError, UploadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD = 524288000  # 500 MB

# mode -> directories (relative to public/) emptied before the upload
MODE_DIRS = {
    'tmp': ('tmp/thumbs', 'tmp/fulls'),
    'main': ('images/fulls', 'images/thumbs'),
}

ASSET_DIRS = ('images/fulls', 'images/thumbs', 'tmp/fulls', 'tmp/thumbs')


def ensure_asset_dirs(public_root):
    """Create the four asset directories if they are missing."""
    for folder in ASSET_DIRS:
        try:
            (public_root / folder).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FatalIOError(f"Could not create {folder}") from e


def verify_content_length(content_length, max_upload=MAX_UPLOAD):
    """Reject uploads whose declared size is over the limit."""
    if content_length is not None and content_length > max_upload:
        logger.info(f"[UPLOAD] Max upload size exceeded (Total size: {content_length} bytes)")
        raise UploadTooLargeError()


def validate_mode(mode):
    if mode not in MODE_DIRS:
        raise ValidationError("Edit mode not set.")
    return mode


def empty_dir(directory):
    """Delete every file in directory. Returns the number of files removed."""
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FatalIOError(f"Could not list {directory.name}") from e

    removed = 0
    for entry in entries:
        if entry.is_dir():
            continue
        try:
            entry.unlink()
        except FileNotFoundError:
            # Already gone
            continue
        except OSError as e:
            raise FatalIOError(f"Could not delete {entry.name}") from e
        removed += 1
    return removed


def reset_for_mode(public_root, mode):
    """Empty both directories of mode, one after the other."""
    validate_mode(mode)
    for folder in MODE_DIRS[mode]:
        removed = empty_dir(public_root / folder)
        logger.info(f"[UPLOAD] Cleared {removed} file(s) from {folder}")


class ModeLocks:
    """One lock per mode so clear-then-write never interleaves for that mode."""

    def __init__(self):
        self._locks = {mode: threading.Lock() for mode in MODE_DIRS}

    @contextmanager
    def hold(self, mode):
        lock = self._locks[validate_mode(mode)]
        with lock:
            yield
