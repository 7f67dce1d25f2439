from datetime import datetime, timezone, timedelta
import pytest
from notetagger.models import Note, NoteFormatError, normalize_tags, format_timestamp, parse_timestamp


CREATED = datetime(2012, 5, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_normalize_tags():
    assert normalize_tags(['Swift, CLI', ' ideas ', '']) == ['swift', 'cli', 'ideas']
    assert normalize_tags([]) == []
    assert normalize_tags([',, ,', '   ']) == []
    assert normalize_tags(['A', 'a,B', 'b']) == ['a', 'a', 'b', 'b']


def test_has_tag_is_exact():
    note = Note(1, 'T', 'B', ['cli', 'python'], CREATED)
    assert note.has_tag('cli')
    assert note.has_tag('CLI')
    assert not note.has_tag('cl')
    assert not note.has_tag('clip')


def test_matches():
    note = Note(1, 'Ideas', 'Try building a Swift CLI', ['tagonly'], CREATED)
    assert note.matches('swift')
    assert note.matches('IDEAS')
    assert note.matches('a swift c')
    assert not note.matches('tagonly')
    assert note.matches('')


def test_created_defaults_to_now():
    note = Note(1, 'T', 'B')
    assert note.created.tzinfo is not None
    assert note.created.microsecond == 0
    assert note.tags == []


def test_as_json():
    note = Note(3, 'Title', 'Body', ['a', 'b'], CREATED)
    assert note.as_json() == {
        'id': 3,
        'title': 'Title',
        'body': 'Body',
        'tags': ['a', 'b'],
        'createdAt': '2012-05-02T03:04:05Z',
    }


def test_from_json_round_trip():
    note = Note(3, 'Title', 'Body', ['b', 'a', 'b'], CREATED)
    assert Note.from_json(note.as_json()) == note


def test_timestamps():
    assert format_timestamp(CREATED) == '2012-05-02T03:04:05Z'
    assert format_timestamp(datetime(2012, 5, 2, 3, 4, 5)) == '2012-05-02T03:04:05Z'
    eastern = timezone(timedelta(hours=-4))
    assert format_timestamp(datetime(2012, 5, 1, 23, 4, 5, tzinfo=eastern)) == '2012-05-02T03:04:05Z'
    assert parse_timestamp('2012-05-02T03:04:05Z') == CREATED
    assert parse_timestamp('2012-05-02T03:04:05+00:00') == CREATED
    assert parse_timestamp('2012-05-02T03:04:05') == CREATED
    assert parse_timestamp('2012-05-01T23:04:05-04:00') == CREATED


@pytest.mark.parametrize('record', [
    [],
    {'title': 'T', 'body': 'B', 'tags': [], 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': '1', 'title': 'T', 'body': 'B', 'tags': [], 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': True, 'title': 'T', 'body': 'B', 'tags': [], 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': 1, 'title': None, 'body': 'B', 'tags': [], 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': 1, 'title': 'T', 'body': 'B', 'tags': 'a,b', 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': 1, 'title': 'T', 'body': 'B', 'tags': [1], 'createdAt': '2012-05-02T03:04:05Z'},
    {'id': 1, 'title': 'T', 'body': 'B', 'tags': [], 'createdAt': 'yesterday'},
])
def test_from_json_rejects_malformed(record):
    with pytest.raises(NoteFormatError):
        Note.from_json(record)
