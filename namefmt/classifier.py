"""
namefmt.classifier

Assigns each file one of the fixed categories. Rules are an explicit ordered
list of (predicate, resolver) pairs; the first predicate that holds wins.
Classification looks only at the file name and the names of the other
entries in its directory snapshot, never at file contents.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, NamedTuple, Optional

from .config import NamingConfig
from .models import Category, Classification, Ecosystem, FileDescriptor


def marker_ecosystem(names: Iterable[str], config: NamingConfig) -> Optional[Ecosystem]:
    """First ecosystem, in configured priority order, whose marker is among ``names``."""
    present = set(names)
    return next((eco for eco in config.ecosystems if eco.marker in present), None)


def _is_package_marker(descriptor: FileDescriptor, siblings: frozenset, config: NamingConfig) -> bool:
    return descriptor.name in config.package_markers


def _is_executable(descriptor: FileDescriptor, siblings: frozenset, config: NamingConfig) -> bool:
    return config.is_executable_extension(descriptor.extension)


def _has_marker_sibling(descriptor: FileDescriptor, siblings: frozenset, config: NamingConfig) -> bool:
    return marker_ecosystem(siblings, config) is not None


def _always(descriptor: FileDescriptor, siblings: frozenset, config: NamingConfig) -> bool:
    return True


Predicate = Callable[[FileDescriptor, frozenset, NamingConfig], bool]


class Rule(NamedTuple):
    predicate: Predicate
    category: Category


RULES: List[Rule] = [
    Rule(_is_package_marker, Category.PACKAGE_MARKER),
    Rule(_is_executable, Category.EXECUTABLE),
    Rule(_has_marker_sibling, Category.PACKAGE_SIBLING),
    Rule(_always, Category.REGULAR),
]


def classify(
    descriptor: FileDescriptor,
    sibling_names: Optional[Iterable[str]] = None,
    config: Optional[NamingConfig] = None,
) -> Classification:
    """
    Classify ``descriptor`` against the names of the other entries in its
    directory. ``sibling_names`` defaults to the descriptor's own snapshot.
    """
    config = config or NamingConfig()
    if sibling_names is None:
        siblings = descriptor.siblings
    else:
        siblings = frozenset(sibling_names) - {descriptor.name}

    for rule in RULES:
        if not rule.predicate(descriptor, siblings, config):
            continue
        if rule.category is Category.PACKAGE_MARKER:
            return Classification(rule.category, marker_ecosystem([descriptor.name], config))
        if rule.category is Category.PACKAGE_SIBLING:
            return Classification(rule.category, marker_ecosystem(siblings, config))
        return Classification(rule.category)

    raise AssertionError("classification rules must end with a catch-all")
