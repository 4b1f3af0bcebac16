#!/usr/bin/env python3
"""
Layout Inspector CLI - Print page layouts, scroll results and overview nodes

This tool builds a synthetic document of identical pages and prints what the
engine computes for it, to help debug layout and navigation problems without
a UI.
"""

import os
import sys
import argparse

# Add src/python directory to Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(os.path.dirname(script_dir), 'src', 'python')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Now we can import our modules
from document import Document
from enums import Axis, OverviewLayout
from error_handler import ErrorHandler
from geometry import Size
from logging_config import setup_logging
from overview_index import OverviewIndex
from view_state import ViewState


def parse_size(text):
    """Parse a size given as WIDTHxHEIGHT"""
    width, height = text.lower().split('x')
    return Size(float(width), float(height))


def print_layout(layout):
    for page_number, rect in layout.items():
        print(f"  page {page_number:4d}: x {rect.x0:9.2f} .. {rect.x1:9.2f}   "
              f"y {rect.y0:9.2f} .. {rect.y1:9.2f}")


def main():
    parser = argparse.ArgumentParser(description='Inspect page layout, scrolling and overview index')
    parser.add_argument('--pages', '-n', type=int, default=10, help='Number of pages')
    parser.add_argument('--page-size', type=parse_size, default=Size(600.0, 800.0),
                        help='Page size in points, e.g. 600x800')
    parser.add_argument('--viewport', type=parse_size, default=Size(800.0, 600.0),
                        help='Viewport size, e.g. 800x600')
    parser.add_argument('--direction', choices=[a.value for a in Axis], default=Axis.HORIZONTAL.value,
                        help='Scroll direction')
    parser.add_argument('--page', '-p', type=int, default=0, help='Anchor page')
    parser.add_argument('--position', type=float, default=0.5, help='Anchor position within the page')
    parser.add_argument('--crop-weight', type=float, default=1.0, help='Crop weight between 0 and 1')
    parser.add_argument('--scroll', '-s', type=float, help='Scroll by this distance and print the result')
    parser.add_argument('--overview', choices=[l.value for l in OverviewLayout],
                        help='Print overview node positions for this layout')
    parser.add_argument('--panel', type=parse_size, default=Size(200.0, 600.0),
                        help='Overview panel size, e.g. 200x600')

    args = parser.parse_args()
    setup_logging()

    try:
        document = Document.uniform(args.pages, args.page_size)
        view = ViewState(
            document,
            viewer_size=args.viewport,
            page_number=args.page,
            page_position=args.position,
            crop_weight=args.crop_weight,
            scroll_direction=Axis(args.direction),
        )

        print(f"Layout around page {view.page_number} at {view.page_position:.3f}:")
        print_layout(view.layout_pages_within_visible_window(view.viewer_size, view.crop_weight))

        if args.scroll is not None:
            page_number, position, layout = view.scroll_by(args.scroll, view.page_number, view.page_position)
            print(f"\nScrolled {args.scroll:g}: page {page_number} at {position:.3f}")
            print_layout(layout)

        if args.overview:
            index = OverviewIndex(args.overview, args.pages)
            index.layout(args.panel)
            print(f"\n{args.overview} overview, gap {index.gap_between_nodes():.2f}:")
            for i in range(args.pages):
                p = index.position(i)
                print(f"  page {i:4d}: ({p.x:8.2f}, {p.y:8.2f}) -> nearest {index.nearest(p)}")
    except (ValueError, KeyError, IndexError) as e:
        ErrorHandler.log_exception(e, "Layout inspection failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
