import logging
import pytest
from txtnotes.conf import NotesConf


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('txtnotes')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def repo(fs):
    repo = NotesConf(notes_dir='/notes').instantiate()
    repo.load()
    return repo
