"""Tests for the bundled component renderers and content helpers."""

from __future__ import annotations

import pytest

from site_contracts.providers import RenderContext
from site_contracts.rendering import HtmlContentRenderer, default_renderers


def _render(component_type: str, props: dict[str, object]) -> str:
    render = default_renderers()[component_type]
    return render({"type": component_type, "props": props}, RenderContext())


def test_registry_covers_bundled_types() -> None:
    assert sorted(default_renderers()) == [
        "CodeBlock@v1",
        "Heading@v1",
        "Image@v1",
        "RichText@v1",
        "Text@v1",
    ]


def test_overrides_extend_registry() -> None:
    def custom(instance: object, context: object) -> str:
        return "<hr>"

    renderers = default_renderers({"Text@v1": custom, "Rule@v1": custom})
    assert renderers["Text@v1"] is custom
    assert "Rule@v1" in renderers


def test_heading_defaults_to_level_two() -> None:
    assert _render("Heading@v1", {"text": "Intro"}) == "<h2>Intro</h2>"


def test_heading_rejects_out_of_range_level() -> None:
    with pytest.raises(ValueError, match="between 1 and 6"):
        _render("Heading@v1", {"text": "Intro", "level": 9})


def test_image_uses_identity_resolver_by_default() -> None:
    html = _render("Image@v1", {"src": "a.png"})
    assert html == '<img src="a.png" alt="" loading="lazy">'


def test_markdown_blank_input_renders_nothing() -> None:
    assert HtmlContentRenderer().markdown("   \n") == ""


def test_markdown_fenced_code_is_highlighted() -> None:
    html = HtmlContentRenderer().markdown("  ```python\n  x = 1\n  ```\n")
    assert 'class="codehilite"' in html


def test_unknown_language_falls_back_to_plain_text() -> None:
    html = HtmlContentRenderer().code_block("whatever", "no-such-lexer")
    assert 'data-language="no-such-lexer"' in html
    assert "whatever" in html
