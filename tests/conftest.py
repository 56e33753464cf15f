from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator

import pytest

from docsite.linking import LinkRegistry
from docsite.models import Doclet


@pytest.fixture(autouse=True)
def _reset_docsite_logger() -> Iterator[None]:
    """Undo handler changes made by CLI runs so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("docsite")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def registry() -> LinkRegistry:
    return LinkRegistry()


@pytest.fixture
def make_doclet() -> Callable[..., Doclet]:
    """Build a typed doclet from keyword overrides in raw JSON record form."""

    def _make(**overrides: Any) -> Doclet:
        record: Dict[str, Any] = {"longname": overrides.get("name", "thing"), "name": "thing"}
        record.update(overrides)
        doclet = Doclet.from_dict(record)
        assert doclet is not None
        return doclet

    return _make
