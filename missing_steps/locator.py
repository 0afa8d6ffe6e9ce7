from __future__ import annotations

from typing import Optional, Union

from .keywords import KeywordRole, keyword_role
from .models import ResolvedStep, SpecDocument, StepRecord, UnresolvedStep


def resolve_step(
    document: SpecDocument, target_line: int
) -> Optional[Union[ResolvedStep, UnresolvedStep]]:
    """Find the step at ``target_line`` and resolve its effective keyword.

    Blocks and their steps are walked last to first. Once the step on the
    target line is found, a continuation step (And/But) keeps walking in the
    same order, across block boundaries, until the nearest primary step above
    it supplies the keyword. Returns None when no step sits on the line and
    an UnresolvedStep when no primary keyword can be attributed to it.
    """
    match: Optional[StepRecord] = None
    seeking_parent = False

    for block in reversed(document.blocks):
        for step in reversed(block.steps):
            if not seeking_parent:
                if step.line != target_line:
                    continue
                match = step
                role, primary = keyword_role(step.keyword, document.language)
                if role is KeywordRole.PRIMARY:
                    return _resolved(match, primary)
                if role is KeywordRole.OTHER:
                    return _unresolved(match)
                seeking_parent = True
                continue

            role, primary = keyword_role(step.keyword, document.language)
            if role is KeywordRole.PRIMARY:
                return _resolved(match, primary)

    if match is None:
        return None
    return _unresolved(match)


def _resolved(step: StepRecord, keyword) -> ResolvedStep:
    return ResolvedStep(keyword=step.keyword, text=step.text, line=step.line, effective_keyword=keyword)


def _unresolved(step: StepRecord) -> UnresolvedStep:
    return UnresolvedStep(keyword=step.keyword, text=step.text, line=step.line)
