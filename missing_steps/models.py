from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .keywords import StepKeyword


class StepRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: str  # raw token: Given | When | Then | And | But | * (may keep trailing space)
    text: str
    line: int


class ScenarioBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    steps: List[StepRecord] = Field(default_factory=list)


class SpecDocument(BaseModel):
    """Parsed feature file: Background and Scenario blocks in file order."""

    model_config = ConfigDict(frozen=True)

    path: str = ""
    language: str = "en"
    blocks: List[ScenarioBlock] = Field(default_factory=list)


class LocatedStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: str
    text: str
    line: int


class ResolvedStep(LocatedStep):
    effective_keyword: StepKeyword


class UnresolvedStep(LocatedStep):
    """A step whose keyword has no primary role and no primary step above it."""


class Snippet(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonical_key: str
    matcher_pattern: str
    argument_names: Tuple[str, ...] = ()
    invocation_keyword: StepKeyword


class PendingTest(BaseModel):
    file: str
    uid: str
    title: str


class RunnerEvent(BaseModel):
    event: str  # test:pending | end
    file: Optional[str] = None
    uid: Optional[str] = None
    title: Optional[str] = None

    def as_pending(self) -> PendingTest:
        return PendingTest(file=self.file or "", uid=self.uid or "", title=self.title or "")
