"""
Pagination helpers for the UI.
Computes page counts and the window of page buttons shown around the current page.
"""

import math  # ceil for page counts
from dataclasses import dataclass  # window container
from typing import List  # type hints


MAX_VISIBLE_PAGES = 5  # page buttons shown at once


@dataclass
class PageWindow:
	pages: List[int]  # page numbers rendered as buttons
	show_first: bool  # render a shortcut to page 1
	show_first_ellipsis: bool  # gap between page 1 and the window
	show_last: bool  # render a shortcut to the last page
	show_last_ellipsis: bool  # gap between the window and the last page


def total_pages(total_results: int, per_page: int) -> int:
	"""Number of pages needed for `total_results` items; 0 when there is nothing to show."""
	if total_results <= 0 or per_page <= 0:
		return 0
	return math.ceil(total_results / per_page)


def visible_pages(current_page: int, page_count: int, max_visible: int = MAX_VISIBLE_PAGES) -> PageWindow:
	"""
	Center a window of at most `max_visible` pages on `current_page`, shifting it
	left when it would run past the last page.
	"""
	if page_count <= 0:
		return PageWindow(pages=[], show_first=False, show_first_ellipsis=False, show_last=False, show_last_ellipsis=False)

	half = max_visible // 2
	start = max(1, current_page - half)
	end = min(page_count, start + max_visible - 1)
	if end - start + 1 < max_visible:
		start = max(1, end - max_visible + 1)

	return PageWindow(
		pages=list(range(start, end + 1)),
		show_first=start > 1,
		show_first_ellipsis=start > 2,
		show_last=end < page_count,
		show_last_ellipsis=end < page_count - 1,
	)
