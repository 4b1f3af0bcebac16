"""
Document model consumed by the layout engine.

DocumentInfo holds the crop margins of a document: a default crop rectangle
(either shared by all pages or split between even and odd pages) and
per-page custom overrides. Document pairs those margins with the natural
page sizes, which is everything the layout engine needs to know about a
document. Nothing here touches the disk.
"""

import logging
from dataclasses import dataclass, field

from config_manager import config
from custom_types import PageNum
from geometry import Rect, Size, UNIT_SQUARE, lerp_rect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllPagesSame:
    margins: Rect


@dataclass(frozen=True)
class EvenOddPages:
    even: Rect
    odd: Rect


CropMargins = AllPagesSame | EvenOddPages


@dataclass
class DocumentInfo:
    """Crop margins for every page of a document, in normalized coordinates."""

    default_margins: CropMargins = field(
        default_factory=lambda: AllPagesSame(config.get_default_margins()))
    custom_margins: dict[PageNum, Rect] = field(default_factory=dict)

    def has_custom_margins(self, page_number: PageNum) -> bool:
        return page_number in self.custom_margins

    def are_even_and_odd_distinguished(self) -> bool:
        return isinstance(self.default_margins, EvenOddPages)

    def _default_for(self, page_number: PageNum) -> Rect:
        match self.default_margins:
            case AllPagesSame(margins=margins):
                return margins
            case EvenOddPages(even=even, odd=odd):
                return even if page_number % 2 == 0 else odd

    def margins(self, page_number: PageNum) -> Rect:
        """Crop rectangle in effect for a page: custom override or default."""
        custom = self.custom_margins.get(page_number)
        if custom is not None:
            return custom
        return self._default_for(page_number)

    def weighted_margins(self, page_number: PageNum, crop_weight: float) -> Rect:
        """Visible part of a page at the given crop weight."""
        return lerp_rect(UNIT_SQUARE, self.margins(page_number), crop_weight)

    def toggle_custom_margins(self, page_number: PageNum) -> None:
        """Give a page its own margins (seeded from the default), or drop them."""
        if self.has_custom_margins(page_number):
            del self.custom_margins[page_number]
            logger.debug("Page %d uses default margins again", page_number)
        else:
            self.custom_margins[page_number] = self._default_for(page_number)
            logger.debug("Page %d now has custom margins", page_number)

    def toggle_even_odd_page_distinction(self, page_number: PageNum) -> None:
        """Switch between one default for all pages and separate even/odd defaults.

        When merging, the default of the given page's parity wins.
        """
        match self.default_margins:
            case AllPagesSame(margins=margins):
                self.default_margins = EvenOddPages(margins, margins)
            case EvenOddPages():
                self.default_margins = AllPagesSame(self._default_for(page_number))

    def set_page_margins(self, page_number: PageNum, rect: Rect) -> None:
        """Update whichever margins entry currently governs the page."""
        if page_number in self.custom_margins:
            self.custom_margins[page_number] = rect
            return
        match self.default_margins:
            case AllPagesSame():
                self.default_margins = AllPagesSame(rect)
            case EvenOddPages(even=even, odd=odd):
                if page_number % 2 == 0:
                    self.default_margins = EvenOddPages(rect, odd)
                else:
                    self.default_margins = EvenOddPages(even, rect)


class Document:
    """Page sizes plus crop margins; the geometry source for layout."""

    def __init__(self, page_sizes: list[Size], info: DocumentInfo | None = None) -> None:
        """
        Args:
            page_sizes: Natural size of each page in points
            info: Crop margins (defaults to config margins for all pages)
        """
        self.page_sizes = list(page_sizes)
        self.info = info if info is not None else DocumentInfo()

    @classmethod
    def uniform(cls, page_count: int, page_size: Size,
                info: DocumentInfo | None = None) -> "Document":
        """Document whose pages all share one size."""
        return cls([page_size] * page_count, info)

    def page_count(self) -> int:
        return len(self.page_sizes)

    def natural_size(self, page_number: PageNum) -> Size:
        return self.page_sizes[page_number]

    def margins(self, page_number: PageNum) -> Rect:
        return self.info.margins(page_number)
