from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

from gherkin.dialect import Dialect


class StepKeyword(str, Enum):
    """Primary invocation keywords a step definition is registered with."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"


class KeywordRole(str, Enum):
    PRIMARY = "primary"
    CONTINUATION = "continuation"
    OTHER = "other"  # "*" and anything the dialect does not know


HOOK_KEYWORDS = frozenset({"Before", "After"})


@lru_cache(maxsize=None)
def _dialect(language: str) -> Dialect:
    return Dialect.for_name(language) or Dialect.for_name("en")


def _stripped(keywords) -> frozenset:
    return frozenset(k.strip() for k in keywords if k.strip() != "*")


def keyword_role(keyword: str, language: str = "en") -> Tuple[KeywordRole, Optional[StepKeyword]]:
    """Classify a raw step keyword against the document's Gherkin dialect.

    Localised primaries are mapped to their English ``StepKeyword`` so that
    ``Angenommen`` renders as ``Given``.
    """
    token = keyword.strip()
    dialect = _dialect(language)
    for primary, keywords in (
        (StepKeyword.GIVEN, dialect.given_keywords),
        (StepKeyword.WHEN, dialect.when_keywords),
        (StepKeyword.THEN, dialect.then_keywords),
    ):
        if token in _stripped(keywords):
            return KeywordRole.PRIMARY, primary
    if token in _stripped(dialect.and_keywords) | _stripped(dialect.but_keywords):
        return KeywordRole.CONTINUATION, None
    return KeywordRole.OTHER, None


def is_hook_keyword(keyword: str) -> bool:
    return keyword.strip() in HOOK_KEYWORDS
