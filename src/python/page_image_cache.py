"""
Rendered page image cache.

Images are opaque to the engine: whatever the renderer returns is stored with
the size it was rendered at. An entry rendered at a different size is stale
and is re-rendered on the next `ensure`.
"""

import logging
from dataclasses import dataclass
from typing import Any

from custom_types import PageNum, PageRenderer
from geometry import Size

logger = logging.getLogger(__name__)


@dataclass
class CachedPage:
    image: Any
    size: Size


class PageImageCache:
    """Page images keyed by page number."""

    def __init__(self) -> None:
        self._pages: dict[PageNum, CachedPage] = {}
        self.inverted = False

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_number: PageNum) -> bool:
        return self.contains(page_number)

    def contains(self, page_number: PageNum) -> bool:
        return page_number in self._pages

    def get(self, page_number: PageNum) -> Any | None:
        entry = self._pages.get(page_number)
        return entry.image if entry is not None else None

    def put(self, page_number: PageNum, image: Any, size: Size) -> None:
        self._pages[page_number] = CachedPage(image, size)

    def invalidate(self, page_number: PageNum) -> None:
        """Drop one page, e.g. after its crop margins changed."""
        self._pages.pop(page_number, None)

    def clear(self) -> None:
        if self._pages:
            logger.debug("Clearing %d cached page images", len(self._pages))
        self._pages.clear()

    def ensure(self, page_number: PageNum, size: Size, render: PageRenderer) -> Any:
        """Cached image of a page at `size`, rendering it when missing or stale."""
        entry = self._pages.get(page_number)
        if entry is not None and entry.size == size:
            return entry.image
        image = render(page_number, size)
        self.put(page_number, image, size)
        return image

    def set_inverted(self, inverted: bool) -> None:
        """Switch brightness inversion; every cached image is rendered the old way."""
        if inverted != self.inverted:
            self.inverted = inverted
            self.clear()
