from datetime import datetime, timezone
import io
import json
import os.path
from pathlib import Path
from txtnotes import cli


def notes_setup(fs, mocker, notes_dir='/notes'):
    Path('~').expanduser().mkdir(parents=True, exist_ok=True)
    Path('~/.txtnotes.conf.py').expanduser().write_text(f"""
from txtnotes.conf import *
conf = NotesConf(notes_dir={notes_dir!r})
""")
    mocker.patch('txtnotes.storage.created_time',
                 side_effect=lambda path: datetime(2020, 1, 2, 3, 4, tzinfo=timezone.utc))


def test_no_command(fs, capsys):
    assert cli.main([]) == 1
    out, err = capsys.readouterr()
    assert 'usage' in out


def test_save_and_list(fs, capsys, mocker):
    notes_setup(fs, mocker)
    assert cli.main(['save', 'Groceries', '-c', 'eggs\nmilk']) == 0
    out, err = capsys.readouterr()
    assert out == 'Saved Groceries\n'
    assert Path('/notes/Groceries.txt').read_text() == 'eggs\nmilk'

    assert cli.main(['save', 'Phone', '-c', 'call back']) == 0
    capsys.readouterr()
    assert cli.main(['list']) == 0
    out, err = capsys.readouterr()
    assert out == '2020-01-02 03:04  Groceries\n2020-01-02 03:04  Phone\n'


def test_save_from_stdin(fs, capsys, mocker, monkeypatch):
    notes_setup(fs, mocker)
    monkeypatch.setattr('sys.stdin', io.StringIO('from stdin\n'))
    assert cli.main(['save', 'Piped']) == 0
    assert Path('/notes/Piped.txt').read_text() == 'from stdin\n'


def test_save_sanitized(fs, capsys, mocker):
    notes_setup(fs, mocker)
    assert cli.main(['save', 'A/B', '-c', 'x']) == 0
    out, err = capsys.readouterr()
    assert out == 'Saved A_B\n'


def test_save_rename(fs, capsys, mocker):
    notes_setup(fs, mocker)
    cli.main(['save', 'Old', '-c', 'one'])
    assert cli.main(['save', 'New', '-c', 'two', '-r', 'Old']) == 0
    assert not os.path.exists('/notes/Old.txt')
    assert Path('/notes/New.txt').read_text() == 'two'


def test_save_empty_title(fs, capsys, mocker):
    notes_setup(fs, mocker)
    assert cli.main(['save', '  ', '-c', 'x']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert err == 'Error: Note title cannot be empty\n'


def test_list_json(fs, capsys, mocker):
    notes_setup(fs, mocker)
    fs.create_file('/notes/One.txt', contents='1')
    assert cli.main(['list', '-j']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == [{'title': 'One', 'created': '2020-01-02T03:04:00+00:00', 'content': '1'}]


def test_list_table(fs, capsys, mocker):
    notes_setup(fs, mocker)
    fs.create_file('/notes/One.txt', contents='first line\nsecond line')
    fs.create_file('/notes/Two.txt', contents='')
    assert cli.main(['list', '-t']) == 0
    out, err = capsys.readouterr()
    assert out == """+-------+------------------+------------+
| Title | Created          | Content    |
+-------+------------------+------------+
| One   | 2020-01-02 03:04 | first line |
| Two   | 2020-01-02 03:04 |            |
+-------+------------------+------------+
"""


def test_show(fs, capsys, mocker):
    notes_setup(fs, mocker)
    fs.create_file('/notes/One.txt', contents='hello')
    assert cli.main(['show', 'One']) == 0
    out, err = capsys.readouterr()
    assert out == 'hello\n'
    assert cli.main(['show', '-j', 'One']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out)['content'] == 'hello'


def test_show_missing(fs, capsys, mocker):
    notes_setup(fs, mocker)
    assert cli.main(['show', 'Nope']) == 1
    out, err = capsys.readouterr()
    assert err == 'Error: No note titled [Nope]\n'


def test_delete(fs, capsys, mocker):
    notes_setup(fs, mocker)
    fs.create_file('/notes/One.txt', contents='1')
    assert cli.main(['delete', 'One']) == 0
    out, err = capsys.readouterr()
    assert out == 'Deleted One\n'
    assert not os.path.exists('/notes/One.txt')
    assert cli.main(['delete', 'One']) == 1


def test_storage_failure(fs, capsys, mocker):
    notes_setup(fs, mocker)
    fs.create_file('/notes')
    assert cli.main(['list']) == 1
    out, err = capsys.readouterr()
    assert err.startswith('Error: Could not create notes directory: ')


def test_verbose_logs_to_stderr(fs, capsys, mocker):
    notes_setup(fs, mocker)
    assert cli.main(['-v', 'save', 'One', '-c', '1']) == 0
    out, err = capsys.readouterr()
    assert out == 'Saved One\n'
    assert '| DEBUG | txtnotes.storage | Wrote /notes/One.txt' in err
    assert '| INFO | txtnotes.repo | Saved note [One]' in err
