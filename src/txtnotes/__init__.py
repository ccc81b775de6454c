"""Keeps short text notes as plain ``.txt`` files in a single directory.

If you installed via ``pip``, run ``txtnotes -h`` to get help.

To use the Python API, look at :class:`txtnotes.repo.NoteRepo`
"""
