import pytest
from pathlib import Path

from whereami.core.models import Cursor
from whereami.parsing.lexer import SourceLexer
from whereami.parsing.pipeline import IndexPipeline

FIXTURES = Path(__file__).parent / "fixtures"


def source(*lines: str) -> bytes:
    """Joins lines into a newline-terminated source buffer."""
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def segment():
    """Runs the lexer alone over a buffer and returns its Segments."""
    def _segment(buffer: bytes):
        return list(SourceLexer("test.c").segment(buffer, Cursor()))
    return _segment


@pytest.fixture
def index():
    """Runs the whole indexing pass over a buffer."""
    def _index(buffer: bytes, filename: str = "test.c"):
        return IndexPipeline().run(buffer, filename)
    return _index
