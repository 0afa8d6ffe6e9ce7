from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from ..errors import FeatureParseError, FeatureReadError
from ..models import ScenarioBlock, SpecDocument, StepRecord

logger = logging.getLogger(__name__)


def _block_from_node(node: dict) -> ScenarioBlock:
    steps = [
        StepRecord(keyword=s["keyword"], text=s["text"], line=s["location"]["line"])
        for s in node.get("steps", [])
    ]
    return ScenarioBlock(name=node.get("name", ""), steps=steps)


def _collect_blocks(children: List[dict]) -> List[ScenarioBlock]:
    blocks: List[ScenarioBlock] = []
    for child in children:
        if "background" in child:
            blocks.append(_block_from_node(child["background"]))
        elif "scenario" in child:
            blocks.append(_block_from_node(child["scenario"]))
        elif "rule" in child:
            # Rules nest their own Background/Scenario children
            blocks.extend(_collect_blocks(child["rule"].get("children", [])))
    return blocks


def parse_feature(text: str, path: str = "") -> SpecDocument:
    """Parse Gherkin text into a SpecDocument.

    Raises FeatureParseError when the text is not a valid feature.
    """
    try:
        document = Parser().parse(TokenScanner(text))
    except ParserError as e:
        raise FeatureParseError(path, str(e)) from e

    feature = document.get("feature")
    if not feature:
        return SpecDocument(path=path)
    return SpecDocument(
        path=path,
        language=feature.get("language", "en"),
        blocks=_collect_blocks(feature.get("children", [])),
    )


class FeatureCache:
    """Process-lifetime memo of parsed feature files, keyed by the path as reported."""

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._documents: Dict[str, SpecDocument] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, path: object) -> bool:
        return path in self._documents

    def resolve_path(self, path: str) -> Path:
        if self.base_dir is None:
            return Path(path)
        return self.base_dir / path

    def get_document(self, path: str) -> SpecDocument:
        cached = self._documents.get(path)
        if cached is not None:
            return cached

        feature_path = self.resolve_path(path)
        try:
            text = feature_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FeatureReadError(str(feature_path), str(e)) from e
        document = parse_feature(text, path=str(feature_path))
        logger.debug("Parsed %s: %d blocks", feature_path, len(document.blocks))
        self._documents[path] = document
        return document
