from __future__ import annotations

from typing import Iterable, List

from ..config import ReporterConfig
from ..keywords import StepKeyword
from ..models import Snippet


def render_snippet(snippet: Snippet, body: str = "// Implement me!", indent: str = "\t") -> List[str]:
    args = ", ".join(snippet.argument_names)
    return [
        f"{snippet.invocation_keyword.value}(/^{snippet.matcher_pattern}$/, ({args}) => {{",
        f"{indent}{body}",
        "});",
    ]


def render_import_hint(keywords: Iterable[StepKeyword], module: str = "@cucumber/cucumber") -> str:
    names = sorted(k.value for k in keywords)
    return f"import {{ {', '.join(names)} }} from '{module}';"


def render_report(snippets: List[Snippet], keywords: Iterable[StepKeyword], config: ReporterConfig) -> List[str]:
    """Lines of the end-of-run report; empty when nothing was synthesized."""
    if not snippets:
        return []

    lines: List[str] = [config.header]
    keywords = list(keywords)
    if keywords:
        lines.append(render_import_hint(keywords, config.import_module))
    for snippet in snippets:
        lines.extend(render_snippet(snippet, body=config.snippet_body, indent=config.snippet_indent))
        lines.append("")
    return lines
