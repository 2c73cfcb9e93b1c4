"""Deterministic traversal of the component instances placed in a page."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from ._constants import REGION_META_KEY


@dc.dataclass(frozen=True, slots=True)
class ComponentPlacement:
    """One component instance and where it sits in the page.

    Attributes
    ----------
    region : str
        Region name from ``page["regions"]``.
    slot : str
        Slot name within the region.
    index : int or None
        Position within the slot's array, or ``None`` for a single instance.
    instance : Any
        The raw instance value; it is not guaranteed to be well formed.
    """

    region: str
    slot: str
    index: int | None
    instance: typ.Any

    @property
    def location(self) -> str:
        """Return ``region.slot`` or ``region.slot[index]``."""
        base = f"{self.region}.{self.slot}"
        if self.index is None:
            return base
        return f"{base}[{self.index}]"


class PageComponents:
    """Restartable sequence of every component placement in a page.

    Regions are visited in mapping order, then slots in mapping order
    (skipping the ``_tw`` metadata key), then array elements by index. Each
    call to :meth:`__iter__` starts a fresh pass over the same document.

    Examples
    --------
    >>> page = {"regions": {"main": {"hero": [{"type": "A"}, {"type": "B"}]}}}
    >>> [p.location for p in PageComponents(page)]
    ['main.hero[0]', 'main.hero[1]']
    """

    __slots__ = ("_page",)

    def __init__(self, page: cabc.Mapping[str, typ.Any] | None) -> None:
        self._page = page

    def __iter__(self) -> cabc.Iterator[ComponentPlacement]:
        if not isinstance(self._page, cabc.Mapping):
            return
        regions = self._page.get("regions")
        if not isinstance(regions, cabc.Mapping):
            return
        for region_name, region in regions.items():
            if not isinstance(region, cabc.Mapping):
                continue
            for slot_name, value in region.items():
                if slot_name == REGION_META_KEY:
                    continue
                if isinstance(value, list):
                    for index, instance in enumerate(value):
                        yield ComponentPlacement(
                            region_name, slot_name, index, instance
                        )
                else:
                    yield ComponentPlacement(region_name, slot_name, None, value)


def iter_page_components(
    page: cabc.Mapping[str, typ.Any] | None,
) -> cabc.Iterator[ComponentPlacement]:
    """Return an iterator over the placements of ``page``."""
    return iter(PageComponents(page))


__all__ = ["ComponentPlacement", "PageComponents", "iter_page_components"]
