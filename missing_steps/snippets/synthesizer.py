from __future__ import annotations

import re
from typing import Dict, List, Optional, Set, Tuple

from ..keywords import StepKeyword
from ..models import ResolvedStep, Snippet


PLACEHOLDER = re.compile(r"<([^<>]+)>")
WILDCARD = "(.*)"


def to_camel_case(name: str) -> str:
    words = [w for w in re.split(r"[^0-9A-Za-z]+", name) if w]
    if not words:
        return "arg"
    # Case changes only at word starts
    ident = words[0][:1].lower() + words[0][1:] + "".join(w[:1].upper() + w[1:] for w in words[1:])
    if not (ident[0].isalpha() or ident[0] == "_"):
        ident = "arg" + ident
    return ident


def extract_arguments(text: str) -> List[str]:
    # One argument per occurrence, in order, to line up with the matcher groups
    return [to_camel_case(m.group(1)) for m in PLACEHOLDER.finditer(text)]


def build_matcher(text: str) -> str:
    return PLACEHOLDER.sub(lambda _: WILDCARD, text)


class SnippetRegistry:
    """Deduplicated snippets keyed by canonical pattern, in first-seen order."""

    def __init__(self) -> None:
        self._snippets: Dict[str, Snippet] = {}
        self._keywords: Set[StepKeyword] = set()

    def __len__(self) -> int:
        return len(self._snippets)

    def __contains__(self, canonical_key: object) -> bool:
        return canonical_key in self._snippets

    def ingest(self, step: ResolvedStep) -> Optional[Snippet]:
        pattern = build_matcher(step.text)
        if pattern in self._snippets:
            return None

        snippet = Snippet(
            canonical_key=pattern,
            matcher_pattern=pattern,
            argument_names=tuple(extract_arguments(step.text)),
            invocation_keyword=step.effective_keyword,
        )
        self._snippets[pattern] = snippet
        self._keywords.add(step.effective_keyword)
        return snippet

    def drain(self) -> Tuple[List[Snippet], Set[StepKeyword]]:
        return list(self._snippets.values()), set(self._keywords)
