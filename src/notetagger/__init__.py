"""Keeps short notes with titles and tags in a JSON file.

If you installed via ``pip``, run ``notetagger -h`` to get help.
Or, run ``python3 -m notetagger -h``.

To use the Python API, look at :class:`notetagger.api.NoteTagger`
"""
