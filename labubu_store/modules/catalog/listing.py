"""Product listing: filter -> sort -> paginate.

Everything here is pure. The same products and query always give the same
page, and nothing is cached between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from labubu_store.app.common.events import Transition
from labubu_store.app.models import ListingQuery, Product, SortKey

PAGE_SIZE = 6


@dataclass(frozen=True)
class ListingPage:
    items: Tuple[Product, ...]
    page: int
    total_pages: int
    total_items: int

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0


def matches_search(product: Product, search_term: str) -> bool:
    return search_term.casefold() in product.name.casefold()


def matches_series(product: Product, selected_series: AbstractSet[str]) -> bool:
    if not selected_series:
        return True
    return product.series is not None and product.series in selected_series


def filter_products(
    products: Iterable[Product],
    search_term: str = "",
    selected_series: AbstractSet[str] = frozenset(),
) -> List[Product]:
    return [p for p in products if matches_search(p, search_term) and matches_series(p, selected_series)]


def sort_products(products: Sequence[Product], sort_key: SortKey) -> List[Product]:
    # sorted() is stable, so ties keep fixture order
    if sort_key is SortKey.PRICE_ASC:
        return sorted(products, key=lambda p: p.price)
    if sort_key is SortKey.PRICE_DESC:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_key is SortKey.NAME_ASC:
        return sorted(products, key=lambda p: (p.name.casefold(), p.name))
    # newest: no recency timestamp exists, only the is_new flag
    return sorted(products, key=lambda p: not p.is_new)


def page_count(total_items: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_items / page_size)


def paginate(products: Sequence[Product], query: ListingQuery, page_size: int = PAGE_SIZE) -> ListingPage:
    """Filter, sort and slice `products` for `query`.

    The page index is trusted; callers validate it against `total_pages`
    (see `change_page`). Zero matches give zero pages.
    """
    matched = filter_products(products, query.search_term, query.selected_series)
    ordered = sort_products(matched, query.sort_key)
    start = (query.page - 1) * page_size
    return ListingPage(
        items=tuple(ordered[start:start + page_size]),
        page=query.page,
        total_pages=page_count(len(ordered), page_size),
        total_items=len(ordered),
    )


def page_window(current: int, total_pages: int) -> List[Optional[int]]:
    """Page numbers for a pagination control; None marks an ellipsis."""
    if total_pages <= 0:
        return []
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    window: List[Optional[int]] = [1]
    if current > 3:
        window.append(None)

    start = max(2, current - 1)
    end = min(total_pages - 1, current + 1)
    if current <= 3:
        end = min(total_pages - 1, 4)
    if current >= total_pages - 2:
        start = max(2, total_pages - 3)
    window.extend(range(start, end + 1))

    if current < total_pages - 2:
        window.append(None)
    window.append(total_pages)
    return window


# --- Query transitions ---
# search, series and sort changes always go back to page 1


def change_search(query: ListingQuery, search_term: str) -> Transition[ListingQuery]:
    return Transition(query.model_copy(update={"search_term": search_term, "page": 1}))


def toggle_series(query: ListingQuery, label: str, selected: bool) -> Transition[ListingQuery]:
    series = set(query.selected_series)
    if selected:
        series.add(label)
    else:
        series.discard(label)
    return Transition(query.model_copy(update={"selected_series": frozenset(series), "page": 1}))


def change_sort(query: ListingQuery, sort_key: str) -> Transition[ListingQuery]:
    try:
        key = SortKey(sort_key)
    except ValueError:
        return Transition(query, rejected=f"Unknown sort option: {sort_key}")
    return Transition(query.model_copy(update={"sort_key": key, "page": 1}))


def change_page(query: ListingQuery, page: int, total_pages: int) -> Transition[ListingQuery]:
    if page < 1 or page > total_pages:
        return Transition(query, rejected="Page out of range")
    return Transition(query.model_copy(update={"page": page}))
