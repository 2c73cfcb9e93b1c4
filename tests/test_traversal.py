"""Unit tests for page component traversal order."""

from __future__ import annotations

from site_contracts.traversal import ComponentPlacement, PageComponents


def _page() -> dict[str, object]:
    return {
        "regions": {
            "header": {"_tw": "sticky", "brand": {"type": "Text@v1", "props": {}}},
            "main": {
                "hero": [
                    {"type": "Heading@v1", "props": {}},
                    {"type": "Text@v1", "props": {}},
                ],
                "body": {"type": "RichText@v1", "props": {}},
            },
            "ignored": "not a region mapping",
        }
    }


def test_traversal_order_and_indices() -> None:
    """Regions, then slots, then array indices are visited in order."""
    locations = [placement.location for placement in PageComponents(_page())]
    assert locations == [
        "header.brand",
        "main.hero[0]",
        "main.hero[1]",
        "main.body",
    ], f"unexpected traversal order: {locations!r}"


def test_metadata_key_is_skipped() -> None:
    """The ``_tw`` region metadata is never yielded as a slot."""
    slots = {placement.slot for placement in PageComponents(_page())}
    assert "_tw" not in slots


def test_traversal_is_restartable() -> None:
    """Iterating twice yields the same sequence."""
    components = PageComponents(_page())
    assert list(components) == list(components)


def test_single_instance_has_null_index() -> None:
    """A slot bound to one instance yields ``index=None``."""
    first = next(iter(PageComponents(_page())))
    assert first == ComponentPlacement(
        "header", "brand", None, {"type": "Text@v1", "props": {}}
    )


def test_missing_page_or_regions_yields_nothing() -> None:
    """Pages without regions have no placements."""
    assert list(PageComponents(None)) == []
    assert list(PageComponents({"title": "Empty"})) == []
    assert list(PageComponents({"regions": []})) == []
