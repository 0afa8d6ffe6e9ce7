from __future__ import annotations

import logging
import re
from typing import List, Optional

from rich.console import Console

from .config import ReporterConfig
from .errors import MissingStepsError
from .keywords import KeywordRole, is_hook_keyword, keyword_role
from .locator import resolve_step
from .models import PendingTest, RunnerEvent, Snippet, UnresolvedStep
from .parsing.feature_cache import FeatureCache
from .snippets.renderer import render_report
from .snippets.synthesizer import SnippetRegistry

logger = logging.getLogger(__name__)

REPORTER_NAME = "missing-steps"

_TRAILING_DIGITS = re.compile(r"\d+$")


def line_from_uid(uid: str) -> int:
    """The runner's uid ends with the step's line number; -1 when it does not."""
    match = _TRAILING_DIGITS.search(uid or "")
    if match is None:
        return -1
    return int(match.group(0))


class MissingStepsReporter:
    """Collects snippets for undefined steps and prints them when the run ends.

    One instance per runner worker: the feature cache and the snippet registry
    are owned by the instance and are not safe to share.
    """

    reporter_name = REPORTER_NAME

    def __init__(
        self,
        config: ReporterConfig,
        console: Optional[Console] = None,
        cache: Optional[FeatureCache] = None,
        registry: Optional[SnippetRegistry] = None,
    ):
        self.config = config
        self.console = console or Console()
        self.cache = cache if cache is not None else FeatureCache(config.base_dir)
        self.registry = registry if registry is not None else SnippetRegistry()
        self.enabled = config.base_dir is not None or cache is not None
        if not self.enabled:
            logger.warning(
                "Unable to generate missing step snippets: MISSING_STEPS_BASE_DIR is not configured"
            )

    def handle(self, event: RunnerEvent) -> None:
        if event.event == "test:pending":
            self.on_test_pending(event.as_pending())
        elif event.event == "end":
            self.on_end()
        else:
            logger.debug("Ignoring runner event %r", event.event)

    def on_test_pending(self, test: PendingTest) -> Optional[Snippet]:
        if not self.enabled:
            return None
        # Only undefined steps carry the marker; skipped and pending ones do not
        if self.config.undefined_marker not in test.title:
            return None

        try:
            document = self.cache.get_document(test.file)
        except (OSError, MissingStepsError) as e:
            logger.warning("Skipping %s: %s", test.title, e)
            return None

        line = line_from_uid(test.uid)
        step = resolve_step(document, line)
        if step is None:
            logger.debug("No step at %s:%d", test.file, line)
            return None
        if is_hook_keyword(step.keyword):
            return None
        if isinstance(step, UnresolvedStep):
            role, _ = keyword_role(step.keyword, document.language)
            if role is KeywordRole.OTHER:
                logger.debug(
                    "%r step has no Given/When/Then role, skipping %s:%d %r",
                    step.keyword.strip(), test.file, line, step.text,
                )
            else:
                logger.debug("No primary keyword for %s:%d %r", test.file, line, step.text)
            return None
        return self.registry.ingest(step)

    def on_end(self) -> List[str]:
        if not self.enabled:
            return []
        snippets, keywords = self.registry.drain()
        lines = render_report(snippets, keywords, self.config)
        for line in lines:
            self.console.print(line, style=self.config.report_style, markup=False, highlight=False, soft_wrap=True)
        return lines
