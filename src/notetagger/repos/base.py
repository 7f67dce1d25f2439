"""Defines the API for loading and saving a user's collection of notes.

The most important class is :class:`Repo`.
"""

from typing import List

from notetagger.models import Note


class Repo:
    """Base class for repos, which are responsible for reading and writing the whole collection of notes.

    The collection is always loaded and saved as a unit, so an implementation only needs to know how to
    turn a list of :class:`notetagger.models.Note` into storage and back.

    Neither method should raise for ordinary storage problems. Failures are logged and degrade to a safe result,
    so that a command-line invocation always finishes.
    """
    def load(self) -> List[Note]:
        """Returns every stored note, in stored order.

        If nothing has been stored yet, or the stored data cannot be read, returns an empty list.
        """
        raise NotImplementedError()

    def save(self, notes: List[Note]) -> bool:
        """Replaces the stored collection with the given notes.

        Returns False if the notes could not be written. The caller's in-memory notes are not affected either way.
        """
        raise NotImplementedError()
