from __future__ import annotations

import click

from agent_kit import output


class TestBox:
    def test_lines_share_width(self):
        rendered = output.box("Title", ["short", click.style("styled line", fg="red")])
        widths = {len(click.unstyle(line)) for line in rendered.splitlines()}
        assert len(widths) == 1

    def test_contains_content(self):
        rendered = click.unstyle(output.box("Heading", ["body"]))
        assert "Heading" in rendered
        assert "body" in rendered


class TestSymbols:
    def test_prefixes(self):
        assert click.unstyle(output.success("ok")) == "✓ ok"
        assert click.unstyle(output.error("bad")) == "✗ bad"
        assert click.unstyle(output.warning("hmm")) == "⚠ hmm"
