"""Command-line interface for notetagger."""


import argparse
from dataclasses import replace
from datetime import datetime
import json
import logging
import sys
from typing import List, Optional
from terminaltables import AsciiTable
from notetagger.api import NoteTagger, Match
from notetagger.conf import NoteTaggerConf, JsonRepoConf
from notetagger.models import Note


SEPARATOR = '-' * 60

COMMANDS = {'add', 'list', 'search', 'delete', 'tags', 'help'}

EXAMPLES = """examples:
  notetagger add "Ideas" "Try building a CLI" python cli ideas
  notetagger list
  notetagger list tag python
  notetagger search python
  notetagger delete 2

Notes are stored in 'notes.json' in the current directory unless configured
otherwise in ~/.notetagger.conf.py or with --file."""


def format_created(created: datetime, date_format: str) -> str:
    return created.astimezone().strftime(date_format)


def _print_note(note: Note, date_format: str) -> None:
    print(SEPARATOR)
    print(f'#{note.id} • {note.title}')
    print(f'Created: {format_created(note.created, date_format)}')
    print(f'Tags:    {", ".join(note.tags) if note.tags else "-"}')
    print('')
    print(note.body)
    print('')


def _print_match(match: Match) -> None:
    print(SEPARATOR)
    print(f'#{match.note.id} • {match.note.title}')
    print(match.snippet)


def _note_id(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("'delete' requires a numeric id")


def _add(args, nt: NoteTagger) -> int:
    note = nt.add(args.title, args.body, args.tags)
    print(f'Added note #{note.id}')
    return 0


def _list(args, nt: NoteTagger) -> int:
    # Only the exact form `list tag <name>` filters; anything else lists everything.
    tag = args.filter[1] if len(args.filter) == 2 and args.filter[0] == 'tag' else None
    notes = nt.notes(tag)
    if args.json:
        print(json.dumps([n.as_json() for n in notes], indent=2))
    elif not notes:
        print(f"No notes found with tag '{tag}'." if tag is not None else 'No notes found.')
    else:
        for note in notes:
            _print_note(note, nt.conf.date_format)
        print(SEPARATOR)
        print(f'Total notes: {len(notes)}')
    return 0


def _search(args, nt: NoteTagger) -> int:
    query = ' '.join(args.words)
    matches = nt.search(query)
    if args.json:
        print(json.dumps([dict(m.note.as_json(), snippet=m.snippet) for m in matches], indent=2))
    elif not matches:
        print(f'No notes matched "{query}".')
    else:
        for match in matches:
            _print_match(match)
        print(SEPARATOR)
        print(f'Matches: {len(matches)}')
    return 0


def _delete(args, nt: NoteTagger) -> int:
    note_id = args.id[0]
    if nt.delete(note_id) is not None:
        print(f'Deleted note #{note_id}')
    else:
        print(f'No note with id #{note_id}.')
    return 0


def _tags(args, nt: NoteTagger) -> int:
    counts = nt.tag_counts(args.tag)
    if args.json:
        print(json.dumps(counts))
    elif not counts:
        print('No tags found.')
    else:
        tags = sorted(counts.keys())
        data = [('Tag', 'Count')] + [(t, counts[t]) for t in tags]
        table = AsciiTable(data)
        table.justify_columns[1] = 'right'
        print(table.table)
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='notetagger',
        description='Simple note and tag manager.',
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('-f', '--file', nargs=1,
                        help='Path of the notes file to use, overriding any configured path.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log details about loading and saving.')
    parser.set_defaults(func=None)

    subs = parser.add_subparsers(title='Commands')

    p_add = subs.add_parser('add', help='Add a note. Each tag may also be a comma-separated list of tags.')
    p_add.add_argument('title')
    p_add.add_argument('body')
    p_add.add_argument('tags', nargs='*', help='Tags for the note. They are stored trimmed and in lower case.')
    p_add.set_defaults(func=_add)

    p_list = subs.add_parser('list', help='List all notes, or only those with a tag: "list tag <name>".')
    p_list.add_argument('filter', nargs='*', help='Use "tag NAME" to only list notes with that tag.')
    p_list.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_list.set_defaults(func=_list)

    p_search = subs.add_parser(
        'search',
        help='Show notes whose title or body contains the given text, ignoring case. '
             'Multiple words are joined with spaces and searched for as a single phrase.')
    p_search.add_argument('words', nargs='+')
    p_search.add_argument('-j', '--json', action='store_true',
                          help='Output as JSON. Each note object also has a "snippet" key.')
    p_search.set_defaults(func=_search)

    p_delete = subs.add_parser('delete', help='Delete the note with the given id.')
    p_delete.add_argument('id', nargs=1, type=_note_id)
    p_delete.set_defaults(func=_delete)

    p_tags = subs.add_parser('tags', help='Show a list of tags and the number of notes that have each tag.')
    p_tags.add_argument('tag', nargs='?', help='If given, only notes with this tag are counted.')
    p_tags.add_argument('-j', '--json', action='store_true',
                        help='Output as JSON. The output is an object whose keys are tags and whose values '
                             'are the number of notes that have that tag.')
    p_tags.set_defaults(func=_tags)

    subs.add_parser('help', help='Show this message.')

    return parser


def _command_word(args: List[str]) -> Optional[str]:
    """Returns the first argument that is not an option or the value of --file."""
    args = iter(args)
    for arg in args:
        if arg in ('-f', '--file'):
            next(args, None)
        elif not arg.startswith('-'):
            return arg
    return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(stream=sys.stderr, format='%(levelname)s: %(message)s')
    logging.getLogger('notetagger').setLevel(logging.INFO if verbose else logging.WARNING)


def main(args: List[str] = None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    if args is None:
        args = sys.argv[1:]
    command = _command_word(args)
    if command is not None and command not in COMMANDS:
        print(f'Unknown command: {command}')
        parser.print_help()
        return 1
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 0
    _configure_logging(args.verbose)
    conf = NoteTaggerConf.for_user()
    if args.file:
        conf = replace(conf, repo_conf=JsonRepoConf(path=args.file[0]))
    return args.func(args, conf.instantiate())
