"""Provides the main entry point for using the library, :class:`NoteTagger`"""

from __future__ import annotations
from collections import defaultdict
from operator import attrgetter
from typing import Dict, Iterable, List, NamedTuple, Optional
from notetagger.conf import NoteTaggerConf
from notetagger.models import Note, normalize_tags


SNIPPET_BEFORE = 40
SNIPPET_AFTER = 80
SNIPPET_FALLBACK = 120


class Match(NamedTuple):
    note: Note
    snippet: str


def _find_ignoring_case(text: str, query: str) -> int:
    """Returns the index in text where query first occurs ignoring case, or -1.

    Some characters change length when lowercased ('İ' becomes two code points), so positions in the
    lowercased text are mapped back to the characters they came from.
    """
    lowered = []
    origins = []
    for i, ch in enumerate(text):
        for c in ch.lower():
            lowered.append(c)
            origins.append(i)
    found = ''.join(lowered).find(query.lower())
    if found < 0:
        return -1
    return origins[found] if found < len(origins) else len(text)


def snippet(body: str, query: str) -> str:
    """Returns an excerpt of body around the first case-insensitive occurrence of query.

    The excerpt starts up to 40 characters before the match and ends up to 80 characters after the match start.
    "..." is added on whichever sides the body was cut. If the query does not occur in the body (for example,
    because it only matched the title), the first 120 characters are returned instead, plus "..." if the
    body is longer than that.
    """
    start = _find_ignoring_case(body, query)
    if start < 0:
        if len(body) > SNIPPET_FALLBACK:
            return body[:SNIPPET_FALLBACK] + '...'
        return body
    begin = max(0, start - SNIPPET_BEFORE)
    end = min(len(body), start + SNIPPET_AFTER)
    result = body[begin:end]
    if begin > 0:
        result = '...' + result
    if end < len(body):
        result += '...'
    return result


class NoteTagger:
    """Main entry point for working programmatically with your collection of notes.

    Generally, you should get an instance using the :meth:`NoteTagger.for_user` method. All notes are loaded
    from the repo when the instance is created; methods that change anything save the whole collection
    immediately afterward.

    .. attribute:: conf
       :type: notetagger.conf.NoteTaggerConf

    .. attribute:: repo
       :type: notetagger.repos.base.Repo

    .. attribute:: saved
       :type: Optional[bool]

       Result of the most recent save, or None if nothing has been saved by this instance. A failed save
       is only logged, so check this if you need to know whether changes reached storage.

    Here's an example of how to use this class:

    .. code-block:: python

       from notetagger.api import NoteTagger
       nt = NoteTagger.for_user()
       nt.add('Ideas', 'Try building a CLI', ['python', 'cli'])
       for note in nt.notes(tag='cli'):
           print(note.title)
    """

    @staticmethod
    def for_user() -> NoteTagger:
        """Creates an instance using the user's ``~/.notetagger.conf.py`` file, or the defaults."""
        return NoteTaggerConf.for_user().instantiate()

    def __init__(self, conf: NoteTaggerConf):
        self.conf = conf
        self.repo = conf.repo_conf.instantiate()
        self.saved = None
        self._notes = self.repo.load()

    def _save(self) -> None:
        self.saved = self.repo.save(self._notes)

    def next_id(self) -> int:
        """Returns the id the next added note will get: one more than the highest current id, or 1.

        This is derived from the notes currently present, so deleting the note with the highest id
        makes that id available again.
        """
        return max((n.id for n in self._notes), default=0) + 1

    def add(self, title: str, body: str, tags: Iterable[str] = ()) -> Note:
        """Creates, saves and returns a new note.

        Tags are normalized by :func:`notetagger.models.normalize_tags`, so each one may be a comma-separated
        list. Title and body are not validated.
        """
        note = Note(id=self.next_id(), title=title, body=body, tags=normalize_tags(tags))
        self._notes.append(note)
        self._save()
        return note

    def notes(self, tag: str = None) -> List[Note]:
        """Returns notes sorted by id, optionally only those with exactly the given tag."""
        result = self._notes
        if tag:
            result = [n for n in result if n.has_tag(tag)]
        return sorted(result, key=attrgetter('id'))

    def get(self, note_id: int) -> Optional[Note]:
        return next((n for n in self._notes if n.id == note_id), None)

    def search(self, query: str) -> List[Match]:
        """Returns notes whose title or body contains query, ignoring case, sorted by id.

        An empty query matches every note.
        """
        return [Match(n, snippet(n.body, query)) for n in self.notes() if n.matches(query)]

    def delete(self, note_id: int) -> Optional[Note]:
        """Removes the note with the given id and saves, returning the removed note.

        Returns None without saving if there is no such note.
        """
        note = self.get(note_id)
        if note is None:
            return None
        self._notes.remove(note)
        self._save()
        return note

    def tag_counts(self, tag: str = None) -> Dict[str, int]:
        """Returns a map of tag names to the number of notes which possess that tag.

        If tag is given, only notes with that tag are counted.
        """
        result = defaultdict(int)
        for note in self.notes(tag):
            for t in set(note.tags):
                result[t] += 1
        return dict(result)
