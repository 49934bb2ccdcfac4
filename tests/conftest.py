import io

import pytest

from waxwriter.config import WriterConfig
from waxwriter.xml.writer import WAX


@pytest.fixture(autouse=True)
def _clean_writer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WAX_* settings from the developer's shell out of the tests."""
    for name in (
        "WAX_INDENT",
        "WAX_TRUST_ME",
        "WAX_LINE_SEPARATOR",
        "WAX_SPACE_IN_EMPTY_ELEMENTS",
        "WAX_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def flat(out: io.StringIO) -> WAX:
    """A writer that keeps the whole document on one line."""
    return WAX(out, config=WriterConfig(indent=None))


@pytest.fixture
def pretty(out: io.StringIO) -> WAX:
    """A writer using the default two-space indentation."""
    return WAX(out)
