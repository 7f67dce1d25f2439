"""Persistence for the collection of notes.

The interface is defined by :class:`notetagger.repos.base.Repo`; :class:`notetagger.repos.jsonfile.JsonFileRepo`
is the implementation used by default.
"""
