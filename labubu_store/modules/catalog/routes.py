from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, request, session
from pydantic import ValidationError

from labubu_store.app.extensions import catalog
from labubu_store.app.models import ListingQuery, Product, SortKey
from labubu_store.app.common.errors import VALIDATION_ERROR, abort_json, abort_not_found
from labubu_store.app.common.events import Transition
from labubu_store.app.common.validation import get_bool, get_int, get_json, require_fields
from labubu_store.modules.catalog.listing import (
    ListingPage,
    change_page,
    change_search,
    change_sort,
    page_window,
    paginate,
    toggle_series,
)

bp = Blueprint("catalog", __name__)

logger = logging.getLogger(__name__)

LISTING_SESSION_KEY = "listing"


def product_card(p: Product) -> Dict[str, Any]:
    return {
        "id": p.id,
        "slug": p.slug,
        "name": p.name,
        "price": p.price,
        "image_url": p.image_url,
        "series": p.series,
        "is_new": p.is_new,
        "is_out_of_stock": p.is_out_of_stock,
    }


def _product_detail(p: Product) -> Dict[str, Any]:
    return {
        **product_card(p),
        "sku": p.sku,
        "short_description": p.short_description,
        "description": p.description,
        "tags": list(p.tags),
        "availability": "Out of Stock" if p.is_out_of_stock else "In Stock",
    }


def _listing_response(query: ListingQuery, result: ListingPage) -> Dict[str, Any]:
    return {
        "items": [product_card(p) for p in result.items],
        "query": query.model_dump(mode="json"),
        "pagination": {
            "page": result.page,
            "page_size": current_app.config["PAGE_SIZE"],
            "total_pages": result.total_pages,
            "total_items": result.total_items,
            "pages": page_window(result.page, result.total_pages),
        },
        "series_options": list(catalog.repository.series_options()),
    }


def _run(query: ListingQuery) -> ListingPage:
    return paginate(catalog.repository.all(), query, current_app.config["PAGE_SIZE"])


def _load_query() -> ListingQuery:
    try:
        return ListingQuery.model_validate(session.get(LISTING_SESSION_KEY) or {})
    except ValidationError:
        logger.warning("Discarding unreadable listing state")
        return ListingQuery()


def _apply(transition: Transition[ListingQuery]):
    if transition.rejected:
        abort_json(400, VALIDATION_ERROR, transition.rejected)
    query = transition.state
    session[LISTING_SESSION_KEY] = query.model_dump(mode="json")
    return _listing_response(query, _run(query)), 200


@bp.get("/home")
def home():
    """GET /api/home - Hero banner plus featured products."""
    featured = catalog.repository.featured(current_app.config["FEATURED_COUNT"])
    return {
        "hero": current_app.config["HERO_BANNER"],
        "featured": [product_card(p) for p in featured],
    }, 200


@bp.get("/series")
def list_series():
    return {"items": list(catalog.repository.series_options())}, 200


@bp.get("/products")
def list_products():
    """GET /api/products - Stateless listing.

    Query params:
      - search: case-insensitive substring of the product name
      - series: repeatable, e.g. ?series=Summer Fun&series=Spooky Cute
      - sort: newest|price-asc|price-desc|name-asc
      - page: 1-indexed
    """
    sort = request.args.get("sort", SortKey.NEWEST.value)
    try:
        sort_key = SortKey(sort)
    except ValueError:
        abort_json(400, VALIDATION_ERROR, f"Unknown sort option: {sort}", {"allowed": [k.value for k in SortKey]})

    page = get_int(request.args, "page", 1)
    if page < 1:
        abort_json(400, VALIDATION_ERROR, "Page out of range")

    query = ListingQuery(
        search_term=request.args.get("search", ""),
        selected_series=frozenset(request.args.getlist("series")),
        sort_key=sort_key,
        page=page,
    )
    result = _run(query)
    # page 1 of an empty result is the empty state, not an error
    if page > max(result.total_pages, 1):
        abort_json(400, VALIDATION_ERROR, "Page out of range", {"total_pages": result.total_pages})

    return _listing_response(query, result), 200


@bp.get("/products/<key>")
def get_product(key: str):
    """GET /api/products/<slug or id> - Product detail plus related products."""
    p = catalog.repository.get(key)
    if not p:
        abort_not_found("Product not found")

    related = catalog.repository.related(p, current_app.config["RELATED_COUNT"])
    return {
        "product": _product_detail(p),
        "related": [product_card(r) for r in related],
    }, 200


# --- Session-held listing (search box, series checkboxes, sort select, pager) ---
@bp.get("/listing")
def get_listing():
    query = _load_query()
    result = _run(query)
    if query.page > max(result.total_pages, 1):
        # catalog shrank under a stale session; fall back to the first page
        return _apply(Transition(query.model_copy(update={"page": 1})))
    return _listing_response(query, result), 200


@bp.post("/listing/search")
def listing_search():
    data = get_json()
    require_fields(data, ["term"])
    return _apply(change_search(_load_query(), str(data["term"])))


@bp.post("/listing/series")
def listing_series():
    data = get_json()
    require_fields(data, ["label"])
    selected = get_bool(data, "selected")
    return _apply(toggle_series(_load_query(), str(data["label"]), selected))


@bp.post("/listing/sort")
def listing_sort():
    data = get_json()
    require_fields(data, ["key"])
    return _apply(change_sort(_load_query(), str(data["key"])))


@bp.post("/listing/page")
def listing_page():
    data = get_json()
    page = get_int(data, "page")
    query = _load_query()
    return _apply(change_page(query, page, _run(query).total_pages))
