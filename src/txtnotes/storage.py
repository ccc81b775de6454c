"""Reads and writes individual note files.

The most important class is :class:`NoteStorage`. Generally you should go through
:class:`txtnotes.repo.NoteRepo` instead of using this module directly, since it keeps the in-memory
index of notes consistent with the files.
"""

from datetime import datetime, timezone
import logging
import os
import os.path
import re
from typing import List

from txtnotes.models import Note


logger = logging.getLogger(__name__)

NOTE_SUFFIX = '.txt'

# Union of what Windows, macOS and Linux refuse in a filename.
ILLEGAL_FILENAME_CHARS = '<>:"/\\|?*' + ''.join(chr(c) for c in range(32))

_ILLEGAL_RE = re.compile('[' + re.escape(ILLEGAL_FILENAME_CHARS) + ']')


class Error(Exception):
    """Base class for errors raised by txtnotes.

    ``str()`` of an instance gives the operation that failed, followed by the underlying cause if there is one.
    """
    def __init__(self, message: str, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause:
            return f'{self.message}: {self.cause}'
        return self.message


class StorageError(Error):
    """Raised when the notes directory cannot be created, or a note file cannot be removed."""
    def __init__(self, message: str, path: str, cause: BaseException = None):
        super().__init__(message, cause)
        self.path = path


class LoadError(Error):
    """Raised when a single note file cannot be read."""
    def __init__(self, message: str, path: str, cause: BaseException = None):
        super().__init__(message, cause)
        self.path = path


class SaveError(Error):
    """Raised when a note file cannot be written."""
    def __init__(self, message: str, title: str, cause: BaseException = None):
        super().__init__(message, cause)
        self.title = title


def sanitize_filename(title: str) -> str:
    """Returns the filename used to store the note with the given title.

    Every character that is illegal in filenames is replaced with an underscore, and ``.txt`` is appended.
    For example, ``A/B: notes?`` becomes ``A_B_ notes_.txt``.

    Distinct titles can map to the same filename (``A/B`` and ``A_B`` both become ``A_B.txt``). Saving one of them
    will overwrite the other; nothing here tries to prevent that.
    """
    return _ILLEGAL_RE.sub('_', title) + NOTE_SUFFIX


def title_for_filename(filename: str) -> str:
    """Returns the note title for a filename, which is just the filename without the ``.txt`` suffix."""
    if filename.endswith(NOTE_SUFFIX):
        return filename[:-len(NOTE_SUFFIX)]
    return filename


def created_time(path: str) -> datetime:
    """Returns the file's birthtime if the platform records one, or else its ctime."""
    stat = os.stat(path)
    try:
        return datetime.fromtimestamp(stat.st_birthtime, tz=timezone.utc)
    except AttributeError:
        return datetime.fromtimestamp(stat.st_ctime, tz=timezone.utc)


class NoteStorage:
    """Accesses the note files in a single flat directory.

    Each note is one UTF-8 text file named by :func:`sanitize_filename`. Content is read and written without
    newline translation, so it round-trips exactly.

    .. attribute:: notes_dir
       :type: str
    """
    def __init__(self, notes_dir: str):
        self.notes_dir = notes_dir

    def ensure_directory(self) -> None:
        """Creates the notes directory and any missing parents. Does nothing if it already exists.

        Raises :exc:`StorageError` if the directory cannot be created.
        """
        try:
            os.makedirs(self.notes_dir, exist_ok=True)
        except OSError as e:
            raise StorageError('Could not create notes directory', self.notes_dir, e) from e

    def list_files(self) -> List[str]:
        """Returns the paths of all note files in the directory, sorted by filename.

        Subdirectories and files with other extensions are ignored.
        Raises :exc:`StorageError` if the directory cannot be listed.
        """
        paths = []
        try:
            for entry in os.scandir(self.notes_dir):
                if entry.name.endswith(NOTE_SUFFIX) and entry.is_file():
                    paths.append(entry.path)
        except OSError as e:
            raise StorageError('Could not list notes directory', self.notes_dir, e) from e
        paths.sort(key=os.path.basename)
        return paths

    def path_for(self, title: str) -> str:
        return os.path.join(self.notes_dir, sanitize_filename(title))

    def read_note(self, path: str) -> Note:
        """Loads the note stored at the given path.

        Raises :exc:`LoadError` if the file cannot be read or is not valid UTF-8, or if its name would give a
        blank title (e.g. ``.txt``).
        """
        title = title_for_filename(os.path.basename(path))
        if not title.strip():
            raise LoadError('Could not load note: filename gives an empty title', path)
        try:
            with open(path, 'r', encoding='utf-8', newline='') as file:
                content = file.read()
            created = created_time(path)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError('Could not load note', path, e) from e
        logger.debug('Read %s (%d characters)', path, len(content))
        return Note(title, created, content)

    def write_note(self, title: str, content: str) -> None:
        """Creates or overwrites the file for the given title.

        Raises :exc:`SaveError` if the file cannot be written.
        """
        path = self.path_for(title)
        try:
            with open(path, 'w', encoding='utf-8', newline='') as file:
                file.write(content)
        except OSError as e:
            raise SaveError(f'Could not save note [{title}]', title, e) from e
        logger.debug('Wrote %s (%d characters)', path, len(content))

    def delete_file(self, title: str) -> bool:
        """Removes the file for the given title.

        Returns False if there was no such file, which is not treated as an error.
        Raises :exc:`StorageError` if the file exists but cannot be removed.
        """
        path = self.path_for(title)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug('Nothing to delete at %s', path)
            return False
        except OSError as e:
            raise StorageError(f'Could not delete note [{title}]', path, e) from e
        logger.debug('Deleted %s', path)
        return True
