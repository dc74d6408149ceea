"""Tests for MarkdownToMarkupConverter: the full forward pipeline."""

from __future__ import annotations

import json

from mdsurface.config import EditorConfig
from mdsurface.converter.md_to_markup import MarkdownToMarkupConverter
from mdsurface.models import BlockElement, RenderResult


class TestConvert:

    def test_heading_break_paragraph(self, converter):
        result = converter.convert("# Hello\n\nWorld")
        assert result.markup == "<h1>Hello</h1><br /><p>World</p>"
        assert [e.type for e in result.elements] == ["h1", "br", "p"]

    def test_blank_input_is_empty(self, converter):
        assert converter.convert("") == RenderResult()
        assert converter.convert("  \n\t\n") == RenderResult()

    def test_code_block(self, converter):
        result = converter.convert("```js\nif (a < b) {}\n```")
        assert result.markup == "<pre><code>if (a &lt; b) {}</code></pre>"
        assert result.elements == [
            BlockElement(type="codeblock", content="if (a < b) {}", level=1, language="js"),
        ]

    def test_list_items_separate_containers(self, converter):
        assert converter.convert("- a\n- b").markup == "<ul><li>a</li></ul><ul><li>b</li></ul>"

    def test_default_config(self):
        assert MarkdownToMarkupConverter().convert("x").markup == "<p>x</p>"

    def test_deterministic(self, converter):
        text = "# T\n**b** *i* `c` [l](u)\n> q\n---"
        assert converter.convert(text) == converter.convert(text)


class TestMetrics:

    def test_counters_and_timing(self, metrics):
        converter = MarkdownToMarkupConverter(EditorConfig(metrics=metrics))
        converter.convert("a\nb\nc")
        assert metrics.counters["mdsurface.conversions_total"] == 1
        assert metrics.counters["mdsurface.blocks_total"] == 3
        assert [name for name, _ in metrics.timings] == ["mdsurface.conversion_duration_ms"]

    def test_blank_input_not_counted(self, metrics):
        MarkdownToMarkupConverter(EditorConfig(metrics=metrics)).convert("")
        assert metrics.counters == {}


class TestDebugDumps:

    def test_block_dump(self, capsys):
        converter = MarkdownToMarkupConverter(EditorConfig(debug_dump_blocks=True))
        converter.convert("# Hi")
        err = capsys.readouterr().err
        assert err.startswith("[mdsurface] Blocks:")
        payload = err.split("Blocks:", 1)[1]
        assert json.loads(payload) == [{"type": "h1", "content": "Hi", "level": 1}]

    def test_markup_dump(self, capsys):
        converter = MarkdownToMarkupConverter(EditorConfig(debug_dump_markup=True))
        converter.convert("x")
        assert "[mdsurface] Markup: <p>x</p>" in capsys.readouterr().err

    def test_no_dump_by_default(self, converter, capsys):
        converter.convert("x")
        assert "[mdsurface]" not in capsys.readouterr().err
