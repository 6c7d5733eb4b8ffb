"""
namefmt.transformer

Name Transformer: computes the candidate name for a file from its category
and the configuration. The pipeline runs in a fixed order:

 1. whitespace runs in the base name become a single underscore
    (``replace_spaces``)
 2. the base name is rewritten in the category's case convention
 3. a ``YYYY_MM_DD__`` prefix is prepended (``timestamp``)

The extension (last suffix) is never touched and package markers keep
their exact name. An existing date prefix is
kept verbatim, so the pipeline is idempotent: transforming its own output
returns the same name.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .config import NamingConfig
from .models import Category, Classification, NamingStyle

TIMESTAMP_FORMAT = "%Y_%m_%d"
TIMESTAMP_PREFIX_RE = re.compile(r"^\d{4}_\d{2}_\d{2}__")

_WHITESPACE_RE = re.compile(r"\s+")
_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")
_SEPARATOR_RE = re.compile(r"[\s_\-]+")
_EDGE_SEPARATORS_RE = re.compile(r"^([_\-]*)(.*?)([_\-]*)$", re.DOTALL)


# ----------------------------------------------------------------------
# NAME PARTS
# ----------------------------------------------------------------------

def split_name(name: str) -> Tuple[str, str]:
    """Split ``name`` into (base, extension); dotfiles have no extension."""
    extension = Path(name).suffix
    if extension:
        return name[: -len(extension)], extension
    return name, ""


def split_words(chunk: str) -> List[str]:
    """
    Split a separator-free chunk at camelCase/PascalCase transitions and at
    letter/digit transitions. ``HTTPServer2Go`` gives ``HTTP``, ``Server``,
    ``2``, ``Go``.
    """
    words: List[str] = []
    current = ""
    for index, ch in enumerate(chunk):
        if current:
            prev = chunk[index - 1]
            nxt = chunk[index + 1] if index + 1 < len(chunk) else ""
            if (
                (prev.islower() and ch.isupper())
                or (prev.isupper() and ch.isupper() and nxt.islower())
                or (prev.isdigit() and ch.isalpha())
                or (prev.isalpha() and ch.isdigit())
            ):
                words.append(current)
                current = ""
        current += ch
    if current:
        words.append(current)
    return words


def _join_words(words: List[str], style: NamingStyle) -> str:
    if style is NamingStyle.SNAKE:
        return "_".join(word.lower() for word in words)
    if style is NamingStyle.KEBAB:
        return "-".join(word.lower() for word in words)
    if style is NamingStyle.CAMEL:
        # Runs of one-character words are merged ("X Y Z file" -> "xyzFile");
        # "aBC" could not be split back into the same words.
        merged: List[str] = []
        previous_single = False
        for word in words:
            single = len(word) == 1
            if single and previous_single:
                merged[-1] += word
            else:
                merged.append(word)
            previous_single = single
        head, *tail = merged
        return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)
    return "".join(words)


def _convert_segment(segment: str, style: NamingStyle) -> str:
    # Leading/trailing separators (``__init__``, ``_private``) are kept as-is.
    match = _EDGE_SEPARATORS_RE.match(segment)
    if match is None:
        return segment
    leading, body, trailing = match.groups()
    words = [word for part in _SEPARATOR_RE.split(body) if part for word in split_words(part)]
    if not words:
        return segment
    return f"{leading}{_join_words(words, style)}{trailing}"


def _convert_piece(piece: str, style: NamingStyle) -> str:
    return ".".join(_convert_segment(segment, style) for segment in piece.split("."))


def convert_case(base: str, style: NamingStyle, *, keep_whitespace: bool = False) -> str:
    """
    Rewrite ``base`` (no extension) in ``style``. Dots inside the base stay
    in place. With ``keep_whitespace`` the whitespace runs are preserved and
    each whitespace-separated piece is converted on its own.
    """
    if style is NamingStyle.PRESERVE or not base:
        return base
    if keep_whitespace:
        return "".join(
            piece if not piece or piece.isspace() else _convert_piece(piece, style)
            for piece in _WHITESPACE_SPLIT_RE.split(base)
        )
    return _convert_piece(base, style)


def replace_whitespace(base: str) -> str:
    return _WHITESPACE_RE.sub("_", base)


def timestamp_prefix(mtime: Optional[float] = None, today: Optional[date] = None) -> str:
    """``YYYY_MM_DD__`` for ``mtime`` (local time), else for ``today``/the current date."""
    if mtime is not None:
        try:
            stamp: date = datetime.fromtimestamp(mtime).date()
        except (OverflowError, OSError, ValueError):
            stamp = today or date.today()
    else:
        stamp = today or date.today()
    return f"{stamp.strftime(TIMESTAMP_FORMAT)}__"


# ----------------------------------------------------------------------
# STYLE RESOLUTION
# ----------------------------------------------------------------------

def style_for(classification: Classification, name: str, config: NamingConfig) -> NamingStyle:
    category = classification.category
    if category is Category.PACKAGE_MARKER:
        return NamingStyle.PRESERVE
    if category is Category.EXECUTABLE:
        return config.executable_style
    if category is Category.PACKAGE_SIBLING and classification.ecosystem is not None:
        return classification.ecosystem.style
    behavior = config.behavior_for(name)
    if behavior is not None:
        return behavior.style
    return config.regular_style


# ----------------------------------------------------------------------
# PIPELINE
# ----------------------------------------------------------------------

def transform(
    name: str,
    classification: Union[Classification, Category],
    config: Optional[NamingConfig] = None,
    *,
    mtime: Optional[float] = None,
    today: Optional[date] = None,
) -> str:
    """
    Compute the candidate name for ``name``.

    Args:
        name: Current file name (no directory part).
        classification: Category (with ecosystem for package siblings).
        config: Configuration snapshot (defaults when omitted).
        mtime: Modification time used for the timestamp prefix.
        today: Fallback date for the timestamp prefix when ``mtime`` is None.
    """
    config = config or NamingConfig()
    if isinstance(classification, Category):
        classification = Classification(classification)

    if classification.category is Category.PACKAGE_MARKER:
        return name

    base, extension = split_name(name)
    prefix_match = TIMESTAMP_PREFIX_RE.match(base)
    prefix = prefix_match.group(0) if prefix_match else ""
    body = base[len(prefix):]

    if config.replace_spaces:
        body = replace_whitespace(body)

    style = style_for(classification, name, config)
    body = convert_case(body, style, keep_whitespace=not config.replace_spaces)

    if config.timestamp and not prefix:
        prefix = timestamp_prefix(mtime, today)

    return f"{prefix}{body}{extension}"
