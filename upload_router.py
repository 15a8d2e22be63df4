"""
Decide where uploaded images land inside public/.

Field names look like '<area>-<kind>':
    area: tmp -> tmp/, main -> images/, anything else -> tmp/
    kind: full -> fulls/, thumb -> thumbs/, anything else -> area root
Field names that are not exactly two parts go to tmp/<field name>/.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

logger = logging.getLogger(__name__)

AREAS = {'tmp': 'tmp', 'main': 'images'}
KINDS = {'full': 'fulls', 'thumb': 'thumbs'}
DEFAULT_AREA = 'tmp'


@dataclass
class Placement:
    field: str
    filename: str
    path: str
    error: Exception = None

    @property
    def ok(self):
        return self.error is None


def parse_descriptor(field):
    """Return (area_root, kind_root), or None for a malformed field name."""
    parts = field.split('-')
    if len(parts) != 2:
        return None
    area, kind = parts
    return AREAS.get(area, DEFAULT_AREA), KINDS.get(kind, '')


def safe_filename(filename):
    """Keep the original name (spaces included) but never a directory part."""
    name = PurePosixPath(filename.replace('\\', '/')).name
    if name in ('', '.', '..'):
        return ''
    return name


def _holding_dir(field):
    # Malformed field names become one directory under tmp/
    name = field.replace('\\', '_').replace('/', '_').replace('..', '_')
    return name or '_'


def resolve_destination(field, filename):
    """Relative path (posix) under public/ for one uploaded file."""
    name = safe_filename(filename)
    buckets = parse_descriptor(field)
    if buckets is None:
        logger.warning(f"Malformed fieldname: {field}")
        return str(PurePosixPath(DEFAULT_AREA, _holding_dir(field), name))

    area_root, kind_root = buckets
    if kind_root:
        return str(PurePosixPath(area_root, kind_root, name))
    return str(PurePosixPath(area_root, name))


def place_file(public_root, field, storage):
    """Write one werkzeug FileStorage to its destination."""
    rel_path = resolve_destination(field, storage.filename)
    placement = Placement(field=field, filename=storage.filename, path=rel_path)
    target = public_root / rel_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        storage.save(str(target))
    except OSError as e:
        logger.error(f"[UPLOAD] Could not write {rel_path}: {e}")
        placement.error = e
    return placement


def place_batch(public_root, files):
    """
    Place every (field, FileStorage) pair under public_root.
    A failing file does not stop the others; check Placement.ok afterwards.
    """
    placements = []
    for field, storage in files:
        if not storage.filename or not safe_filename(storage.filename):
            logger.debug(f"[UPLOAD] Skipping unnamed file in field {field}")
            continue
        placements.append(place_file(public_root, field, storage))
    return placements
