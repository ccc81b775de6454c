"""Defines :class:`Note`, the only entity txtnotes deals with."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Note:
    """A note as it exists on disk: one ``.txt`` file in the notes directory.

    Instances are only created by reading a file, so every field reflects the filesystem.
    """

    title: str
    """The filename without its ``.txt`` suffix. Titles are unique and case-sensitive."""

    created: datetime
    """When the file was created, according to the filesystem.

    On Windows and macOS this is the file's birthtime, which editing the note does not change. Linux does not report
    a birthtime, so the ctime is used there instead, and that is updated every time the note is saved.
    Renaming a note always creates a new file and thus a new timestamp.
    """

    content: str = ''
    """The full body of the file."""

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'title': self.title,
            'created': self.created.isoformat(),
            'content': self.content
        }
