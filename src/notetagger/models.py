"""Defines the :class:`Note` record and its JSON representation."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List


class NoteFormatError(Exception):
    """Raised when a stored record cannot be converted into a :class:`Note`."""
    def __init__(self, message: str, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


def normalize_tags(raw_tags: Iterable[str]) -> List[str]:
    """Splits, trims and lowercases tags, dropping any that end up empty.

    Each entry may itself be a comma-separated list, so ``['Swift, CLI', ' ideas ', '']``
    becomes ``['swift', 'cli', 'ideas']``. Order is preserved and duplicates are kept.
    """
    return [t.strip().lower() for raw in raw_tags for t in raw.split(',') if t.strip()]


def format_timestamp(value: datetime) -> str:
    """Returns an ISO-8601 UTC string with second precision, like ``2012-05-02T03:04:05Z``."""
    if not value.tzinfo:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def parse_timestamp(value: str) -> datetime:
    """Parses an ISO-8601 timestamp. A trailing ``Z`` and explicit offsets are both accepted.

    Naive timestamps are assumed to be UTC.
    """
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    result = datetime.fromisoformat(value)
    if not result.tzinfo:
        result = result.replace(tzinfo=timezone.utc)
    return result


def utc_now() -> datetime:
    """Returns the current UTC time truncated to whole seconds, matching what gets stored."""
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Note:
    """A single titled, tagged text record."""

    id: int
    """Positive integer, unique within a collection. Never changes once assigned."""

    title: str

    body: str

    tags: List[str] = field(default_factory=list)
    """Lowercase, trimmed, non-empty labels, in the order they were given. See :func:`normalize_tags`."""

    created: datetime = field(default_factory=utc_now)
    """When the note was added. Always timezone-aware, with whole-second precision."""

    def has_tag(self, tag: str) -> bool:
        """True if one of the tags is exactly the given tag (compared in lower case)."""
        tag = tag.lower()
        return any(t.lower() == tag for t in self.tags)

    def matches(self, query: str) -> bool:
        """True if the query occurs in the title or body, ignoring case.

        Tags are not searched. An empty query matches every note.
        """
        q = query.lower()
        return q in self.title.lower() or q in self.body.lower()

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'id': self.id,
            'title': self.title,
            'body': self.body,
            'tags': list(self.tags),
            'createdAt': format_timestamp(self.created),
        }

    @classmethod
    def from_json(cls, record: dict) -> Note:
        """Inverse of :meth:`as_json`. Raises :exc:`NoteFormatError` for malformed records."""
        if not isinstance(record, dict):
            raise NoteFormatError(f'Expected an object but found {type(record).__name__}')
        try:
            note_id = record['id']
            title = record['title']
            body = record['body']
            tags = record['tags']
            created = record['createdAt']
        except KeyError as e:
            raise NoteFormatError(f'Missing field {e}', e)
        if not isinstance(note_id, int) or isinstance(note_id, bool):
            raise NoteFormatError(f'Field "id" must be an integer, not {note_id!r}')
        if not (isinstance(title, str) and isinstance(body, str) and isinstance(created, str)):
            raise NoteFormatError(f'Fields "title", "body" and "createdAt" of note {note_id} must be strings')
        if not (isinstance(tags, list) and all(isinstance(t, str) for t in tags)):
            raise NoteFormatError(f'Field "tags" of note {note_id} must be a list of strings')
        try:
            created = parse_timestamp(created)
        except ValueError as e:
            raise NoteFormatError(f'Invalid createdAt timestamp for note {note_id}: {created!r}', e)
        return cls(id=note_id, title=title, body=body, tags=tags, created=created)
