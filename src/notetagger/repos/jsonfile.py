"""Provides the :class:`JsonFileRepo` class."""

import json
import logging
import os
import os.path
import stat
from tempfile import mkstemp
from typing import List

from notetagger.conf import JsonRepoConf
from notetagger.models import Note, NoteFormatError
from notetagger.repos.base import Repo


logger = logging.getLogger(__name__)


def dumps(notes: List[Note]) -> str:
    """Serializes notes as a pretty-printed JSON array with keys in alphabetical order."""
    return json.dumps([n.as_json() for n in notes], indent=2, sort_keys=True, ensure_ascii=False) + '\n'


def _file_mode(path: str) -> int:
    """Returns the permission bits to give a newly written notes file at path.

    An existing file keeps its mode; a new one gets the default a plain ``open`` would give it.
    """
    if os.path.exists(path):
        return stat.S_IMODE(os.stat(path).st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def loads(text: str) -> List[Note]:
    """Inverse of :func:`dumps`. Raises :exc:`ValueError` or :exc:`NoteFormatError` for malformed text."""
    records = json.loads(text)
    if not isinstance(records, list):
        raise NoteFormatError(f'Expected a list of notes but found {type(records).__name__}')
    return [Note.from_json(r) for r in records]


class JsonFileRepo(Repo):
    """Stores all notes in a single JSON file, which is rewritten in full on every save.

    A missing or empty file is treated as an empty collection, and the file is only created once something is
    saved. If the file exists but cannot be parsed, a warning is logged and the collection is treated as empty;
    the unreadable file is left alone until the next save replaces it.

    Saving writes to a temporary file next to the target and then renames it into place, so an interrupted write
    should not leave a truncated file behind. There is no locking: if two processes save concurrently, the last
    one wins.

    .. attribute:: conf
       :type: notetagger.conf.JsonRepoConf
    """
    def __init__(self, conf: JsonRepoConf):
        self.conf = conf
        if not conf.path:
            raise ValueError('`path` must be non-empty in JsonRepoConf.')

    def load(self) -> List[Note]:
        path = self.conf.path
        if not os.path.exists(path):
            logger.info('No notes file at %s; starting with no notes', path)
            return []
        try:
            with open(path, 'r', encoding='utf-8') as file:
                text = file.read()
            if not text:
                return []
            notes = loads(text)
        except (OSError, ValueError, NoteFormatError) as e:
            logger.warning('Failed to load notes from %s: %s', path, e)
            return []
        logger.info('Loaded %d notes from %s', len(notes), path)
        return notes

    def save(self, notes: List[Note]) -> bool:
        path = self.conf.path
        parent, filename = os.path.split(path)
        tmp = None
        try:
            fd, tmp = mkstemp(prefix=f'.{filename}.', suffix='.tmp', dir=parent or os.curdir)
            with os.fdopen(fd, 'w', encoding='utf-8') as file:
                file.write(dumps(notes))
            os.chmod(tmp, _file_mode(path))
            os.replace(tmp, path)
        except OSError as e:
            logger.error('Failed to save notes to %s: %s', path, e)
            if tmp and os.path.exists(tmp):
                try:
                    os.remove(tmp)
                except OSError as cleanup_error:
                    logger.warning('Could not remove temporary file %s: %s', tmp, cleanup_error)
            return False
        logger.info('Saved %d notes to %s', len(notes), path)
        return True
