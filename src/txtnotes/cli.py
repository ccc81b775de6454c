"""Command-line interface for txtnotes."""


import argparse
import json
import logging
import sys
from terminaltables import AsciiTable
from txtnotes.conf import NotesConf
from txtnotes.models import Note
from txtnotes.repo import NoteRepo
from txtnotes.storage import Error


LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger('txtnotes')
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


def _summary(note: Note, width: int = 40) -> str:
    lines = note.content.splitlines()
    first = lines[0] if lines else ''
    if len(first) > width:
        first = first[:width - 3] + '...'
    return first


def _list(args, repo: NoteRepo) -> int:
    notes = repo.list_notes()
    if args.json:
        print(json.dumps([n.as_json() for n in notes]))
    elif args.table:
        data = [('Title', 'Created', 'Content')]
        data.extend((n.title, n.created.strftime('%Y-%m-%d %H:%M'), _summary(n)) for n in notes)
        table = AsciiTable(data)
        print(table.table)
    else:
        for note in notes:
            print(f'{note.created.strftime("%Y-%m-%d %H:%M")}  {note.title}')
    return 0


def _show(args, repo: NoteRepo) -> int:
    note = repo.get_by_title(args.title[0])
    if args.json:
        print(json.dumps(note.as_json()))
    else:
        print(note.content)
    return 0


def _save(args, repo: NoteRepo) -> int:
    content = args.content[0] if args.content else sys.stdin.read()
    previous = args.rename_from[0] if args.rename_from else None
    title = repo.save(args.title[0], content, previous_title=previous)
    print(f'Saved {title}')
    return 0


def _delete(args, repo: NoteRepo) -> int:
    repo.delete(args.title[0])
    print(f'Deleted {args.title[0]}')
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.set_defaults(func=None)
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every file operation to stderr.')

    subs = parser.add_subparsers(title='Commands')

    p_list = subs.add_parser('list', help='List notes, most recently created first.')
    p_list_formats = p_list.add_mutually_exclusive_group()
    p_list_formats.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_list_formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')
    p_list.set_defaults(func=_list)

    p_show = subs.add_parser('show', help='Print the content of a note.')
    p_show.add_argument('title', nargs=1, help='Exact (case-sensitive) title of the note.')
    p_show.add_argument('-j', '--json', action='store_true', help='Output the note as JSON.')
    p_show.set_defaults(func=_show)

    p_save = subs.add_parser(
        'save',
        help='Create or overwrite a note. Characters that are not allowed in filenames are replaced with '
             'underscores in the title, so titles differing only in such characters refer to the same note.')
    p_save.add_argument('title', nargs=1)
    p_save.add_argument('-c', '--content', nargs=1, help='Content of the note. If omitted, it is read from stdin.')
    p_save.add_argument('-r', '--rename-from', nargs=1,
                        help='Title the note had before. If it differs from the new title, the old note is removed.')
    p_save.set_defaults(func=_save)

    p_delete = subs.add_parser('delete', help='Delete a note.')
    p_delete.add_argument('title', nargs=1, help='Exact (case-sensitive) title of the note.')
    p_delete.set_defaults(func=_delete)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 1
    _configure_logging(args.verbose)
    repo = NotesConf.for_user().instantiate()
    try:
        repo.load()
        return args.func(args, repo)
    except Error as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
