"""Render documentation records into a cross-linked static HTML site."""

from .collection import DocletCollection
from .enricher import DocletEnricher, EnrichedDoclets
from .linking import LinkRegistry, UrlGenerator
from .models import Doclet, Tutorial
from .navigation import NavigationBuilder
from .orchestrator import Orchestrator, RenderResult
from .paths import SourcePathMapper
from .signature import SignatureBuilder

__all__ = [
    "Doclet",
    "DocletCollection",
    "DocletEnricher",
    "EnrichedDoclets",
    "LinkRegistry",
    "NavigationBuilder",
    "Orchestrator",
    "RenderResult",
    "SignatureBuilder",
    "SourcePathMapper",
    "Tutorial",
    "UrlGenerator",
]
