from __future__ import annotations
from dataclasses import dataclass, replace
import os.path


DEFAULT_NOTES_DIR = os.path.join('~', 'Documents', 'txtnotes')


@dataclass
class NotesConf:
    notes_dir: str = DEFAULT_NOTES_DIR
    """The folder holding the note files. It will be created if it does not exist.

    Only files directly inside it whose names end in ``.txt`` are treated as notes.
    ``~`` is expanded to the user's home directory.
    """

    @classmethod
    def user_config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.txtnotes.conf.py'))

    @classmethod
    def for_user(cls) -> NotesConf:
        """Loads the configuration from ``~/.txtnotes.conf.py``.

        The file is a Python script that should assign a :class:`NotesConf` to the variable ``conf``, for example:

        .. code-block:: python

           from txtnotes.conf import *
           conf = NotesConf(notes_dir='~/Dropbox/notes')

        If the file does not exist, the default configuration is returned.
        """
        path = cls.user_config_path()
        if not os.path.exists(path):
            return cls()
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Exception('You need to assign an instance of NotesConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self):
        return replace(
            self,
            notes_dir=os.path.abspath(os.path.expanduser(self.notes_dir))
        )

    def instantiate(self):
        """Returns a :class:`txtnotes.repo.NoteRepo` for this configuration. Call its ``load`` method before use."""
        from txtnotes.repo import NoteRepo
        return NoteRepo(self.standardize())
