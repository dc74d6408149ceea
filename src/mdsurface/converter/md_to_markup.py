"""Full Markdown-to-markup conversion pipeline.

:class:`MarkdownToMarkupConverter` runs the two forward stages:

1. **Classify**: :func:`classify` splits the text into block elements,
   inline-styling every non-code line.
2. **Render**: :func:`render_blocks` maps each element to its fragment.

The result is a :class:`RenderResult` holding both the elements and the
markup.  Blank input renders to an empty string.
"""

from __future__ import annotations

import json
import sys
import time

from mdsurface.config import EditorConfig
from mdsurface.converter.block_classifier import classify
from mdsurface.converter.block_renderer import render_blocks
from mdsurface.models import RenderResult
from mdsurface.observability import get_logger, resolve_metrics, set_level

log = get_logger("mdsurface.converter")


class MarkdownToMarkupConverter:
    """Convert markdown text to surface markup.

    Parameters
    ----------
    config:
        Configuration controlling metrics, log level and debug dumps.

    Examples
    --------
    >>> converter = MarkdownToMarkupConverter(EditorConfig())
    >>> converter.convert("# Hello\\n\\nWorld").markup
    '<h1>Hello</h1><br /><p>World</p>'
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config = config or EditorConfig()
        self._metrics = resolve_metrics(self._config.metrics)
        set_level(log, self._config.log_level)

    def convert(self, markdown: str) -> RenderResult:
        """Classify and render *markdown*.

        Parameters
        ----------
        markdown:
            Raw markdown text.

        Returns
        -------
        RenderResult
            ``elements`` (the block list) and ``markup`` (their rendered
            fragments, concatenated).  Both are empty for blank input.
        """
        if markdown.strip() == "":
            return RenderResult()

        started = time.perf_counter()
        elements = classify(markdown)

        if self._config.debug_dump_blocks:
            print(
                "[mdsurface] Blocks:",
                json.dumps([e.to_dict() for e in elements], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        markup = render_blocks(elements)

        if self._config.debug_dump_markup:
            print("[mdsurface] Markup:", markup, file=sys.stderr)

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._metrics.increment("mdsurface.conversions_total")
        self._metrics.increment("mdsurface.blocks_total", len(elements))
        self._metrics.timing("mdsurface.conversion_duration_ms", elapsed_ms)
        log.debug(
            "markdown converted",
            extra={"extra_fields": {
                "op": "convert",
                "lines": markdown.count("\n") + 1,
                "blocks": len(elements),
                "duration_ms": round(elapsed_ms, 3),
            }},
        )

        return RenderResult(elements=elements, markup=markup)
