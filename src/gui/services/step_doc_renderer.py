"""Default step documentation renderer.

Produces a small HTML fragment for the content pane:

 - a heading with the "Step X of N" label (or "Step <title>" when the step's
   position is unknown)
 - the description rendered as CommonMark. Raw HTML in the description is
   escaped, and description headings are pushed one level down so they nest
   under the step heading.
 - a ``file:line`` footer for navigable steps

The assembled fragment is passed through ``sanitize_html``.
"""

from __future__ import annotations

import html
from typing import List, Optional

from markdown_it import MarkdownIt

from gui.services.html_sanitizer import sanitize_html
from tours.domain.models import Step
from tours.protocols import StepPosition

__all__ = ["StepDocRenderer", "meta_label"]


def meta_label(step: Step, position: Optional[StepPosition]) -> str:
    if position is None:
        return f"Step {step.title}"
    return f"Step {position.ordinal} of {position.total}: {step.title}"


class StepDocRenderer:
    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark", {"html": False})

    def render(self, step: Step, position: Optional[StepPosition] = None) -> str:
        parts: List[str] = [f"<h1>{html.escape(meta_label(step, position))}</h1>"]
        if step.description.strip():
            parts.append(self._description(step.description))
        if step.is_navigable:
            parts.append(f'<p class="location"><code>{html.escape(step.location_label)}</code></p>')
        return sanitize_html('<div class="step-doc">' + "".join(parts) + "</div>")

    def _description(self, text: str) -> str:
        env: dict = {}
        tokens = self._md.parse(text, env)
        for token in tokens:
            if token.type in ("heading_open", "heading_close"):
                level = min(int(token.tag[1:]) + 1, 6)
                token.tag = f"h{level}"
        return self._md.renderer.render(tokens, self._md.options, env)
