import matplotlib

matplotlib.use("Agg")

import pytest

from tagrec.data.reader import TaggingLogReader


@pytest.fixture
def read_lines():
    """Build a reader over in-memory lines."""
    def _read(lines, **kwargs):
        reader = TaggingLogReader(**kwargs)
        reader.read_lines(lines)
        return reader
    return _read
