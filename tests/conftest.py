import logging
import os

import pytest

logger = logging.getLogger(__name__)


def get_fixture(name: str) -> str:
    """Get a fixture by name."""
    return os.path.join(os.path.dirname(__file__), "fixtures", name)


@pytest.fixture
def simple_svg() -> str:
    """Path of an Inkscape document with editor metadata and dead definitions."""
    return get_fixture("simple.svg")
