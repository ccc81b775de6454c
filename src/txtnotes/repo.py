"""Provides the :class:`NoteRepo` class, the main entry point for working with notes programmatically."""

from dataclasses import replace
import logging
from operator import attrgetter
from typing import Dict, List, Optional

from txtnotes.conf import NotesConf
from txtnotes.models import Note
from txtnotes.storage import Error, LoadError, NoteStorage, StorageError, sanitize_filename, title_for_filename


logger = logging.getLogger(__name__)


class ValidationError(Error):
    """Raised when a note cannot be saved because its title is empty."""


class NotFoundError(Error):
    """Raised when no loaded note has the requested title."""
    def __init__(self, message: str, title: str):
        super().__init__(message)
        self.title = title


class NotInitializedError(Error):
    """Raised when a :class:`NoteRepo` is used before :meth:`NoteRepo.load` has succeeded."""


class NoteRepo:
    """Keeps an in-memory index of the notes directory and applies changes to both.

    Call :meth:`load` before anything else. Every change to a note is written to disk first, then the whole
    index is reloaded from the directory, so :attr:`txtnotes.models.Note.created` and the listing order
    always reflect the actual files.

    Titles are the identity of notes. Because titles are turned into filenames by
    :func:`txtnotes.storage.sanitize_filename`, two titles that differ only in characters that are illegal in
    filenames end up sharing a file, and saving one overwrites the other.

    Instances are not thread-safe.

    .. attribute:: conf
       :type: txtnotes.conf.NotesConf

    .. attribute:: storage
       :type: txtnotes.storage.NoteStorage
    """
    def __init__(self, conf: NotesConf):
        self.conf = conf
        self.storage = NoteStorage(conf.notes_dir)
        self._notes: Dict[str, Note] = {}
        self._loaded = False

    @property
    def ready(self) -> bool:
        """True once :meth:`load` has completed."""
        return self._loaded

    def _check_ready(self) -> None:
        if not self._loaded:
            raise NotInitializedError('Notes have not been loaded yet; call load() first')

    def load(self) -> int:
        """Discards the in-memory notes and reads them all again from the notes directory.

        The directory is created if it does not exist. Files that cannot be read are logged and skipped.

        Returns the number of notes loaded.
        Raises :exc:`txtnotes.storage.StorageError` if the directory cannot be created or listed; the repo
        is then left unloaded.
        """
        self._notes = {}
        self._loaded = False
        self.storage.ensure_directory()
        skipped = 0
        for path in self.storage.list_files():
            try:
                note = self.storage.read_note(path)
            except LoadError as e:
                logger.warning('Skipping %s: %s', e.path, e)
                skipped += 1
                continue
            self._notes[note.title] = note
        self._loaded = True
        logger.info('Loaded %d notes from %s (%d skipped)', len(self._notes), self.conf.notes_dir, skipped)
        return len(self._notes)

    def list_notes(self) -> List[Note]:
        """Returns copies of all notes, most recently created first.

        Notes with the same creation time stay in the order they were loaded in.
        """
        self._check_ready()
        return sorted((replace(n) for n in self._notes.values()), key=attrgetter('created'), reverse=True)

    def get_by_title(self, title: str) -> Note:
        """Returns a copy of the note with exactly the given title.

        Raises :exc:`NotFoundError` if there is none.
        """
        self._check_ready()
        note = self._notes.get(title)
        if note is None:
            raise NotFoundError(f'No note titled [{title}]', title)
        return replace(note)

    def save(self, title: str, content: str, previous_title: Optional[str] = None) -> str:
        """Creates or updates a note, then reloads all notes.

        Leading and trailing whitespace is removed from the title. If ``previous_title`` is given and differs from
        the new title, the note is being renamed: its old file is deleted after the new one has been written.

        Returns the title of the saved note as it will appear in :meth:`list_notes`. That is the title with any
        characters that are illegal in filenames replaced by underscores.

        Raises :exc:`ValidationError` if the title is blank, or :exc:`txtnotes.storage.SaveError` if the file cannot
        be written. In either case nothing is changed.
        """
        self._check_ready()
        title = title.strip()
        if not title:
            raise ValidationError('Note title cannot be empty')

        self.storage.write_note(title, content)

        if previous_title is not None and previous_title != title:
            # Same filename means the write above already replaced it.
            if sanitize_filename(previous_title) != sanitize_filename(title):
                try:
                    self.storage.delete_file(previous_title)
                except StorageError as e:
                    logger.warning('Could not remove old file for renamed note [%s]: %s', previous_title, e)
            self._notes.pop(previous_title, None)

        self.load()
        saved_title = title_for_filename(sanitize_filename(title))
        if previous_title is not None and previous_title != saved_title:
            logger.info('Saved note [%s] (renamed from [%s])', saved_title, previous_title)
        else:
            logger.info('Saved note [%s]', saved_title)
        return saved_title

    def delete(self, title: str) -> None:
        """Deletes the note with exactly the given title, from disk and memory.

        Raises :exc:`NotFoundError` without touching anything if no loaded note has that title.
        It is not an error if the file has already disappeared from disk.
        """
        self._check_ready()
        if title not in self._notes:
            raise NotFoundError(f'No note titled [{title}]', title)
        self.storage.delete_file(title)
        del self._notes[title]
        logger.info('Deleted note [%s]', title)

    def __len__(self):
        return len(self._notes)

    def __contains__(self, title):
        return title in self._notes
