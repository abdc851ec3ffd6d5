"""Prompt normalization and clause splitting."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")

# Applied in order as plain substring replacements
_SPELLING: list[tuple[str, str]] = [
    ("colour", "color"),
]

_QUOTES = ("'", '"')

# Applied in order; each separator re-splits the clauses produced so far.
CLAUSE_SEPARATORS: list[str] = [
    ", and ",
    " and ",
    ", with ",
    " with ",
    ", but ",
    " but ",
    ". ",
    "; ",
]


def normalize_prompt(text: str) -> str:
    """Lowercase, trim, collapse whitespace, fix spellings and drop quotes.

    Example:
        >>> normalize_prompt('  Warm  "Colour" ')
        'warm color'
    """
    out = _WHITESPACE.sub(" ", text.lower().strip())
    for source, target in _SPELLING:
        out = out.replace(source, target)
    for quote in _QUOTES:
        out = out.replace(quote, "")
    return out.strip()


def split_into_clauses(text: str) -> list[str]:
    """Split normalized text into independent clauses.

    Separators cascade: a clause produced by an earlier separator can be
    split again by a later one, so ``CLAUSE_SEPARATORS`` order matters.
    Phrases such as "black and white" are split too.
    """
    clauses = [text]
    for separator in CLAUSE_SEPARATORS:
        next_clauses: list[str] = []
        for clause in clauses:
            next_clauses.extend(clause.split(separator))
        clauses = next_clauses
    return [c.strip() for c in clauses if c.strip()]


__all__ = ["CLAUSE_SEPARATORS", "normalize_prompt", "split_into_clauses"]
