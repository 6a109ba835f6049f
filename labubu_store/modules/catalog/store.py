"""Read-only product repository backed by the static fixture table."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

from flask import Flask, current_app

from labubu_store.app.models import Product

logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    def __len__(self) -> int: ...

    def all(self) -> Sequence[Product]: ...

    def get(self, key: str) -> Optional[Product]: ...

    def series_options(self) -> Sequence[str]: ...

    def featured(self, limit: int) -> List[Product]: ...

    def related(self, product: Product, limit: int) -> List[Product]: ...


class FixtureRepository:
    """Immutable in-memory catalog. Lookup by slug or id."""

    def __init__(self, products: Iterable[Union[Product, Mapping[str, Any]]], series: Optional[Iterable[str]] = None):
        items = tuple(p if isinstance(p, Product) else Product.model_validate(p) for p in products)

        by_id = {}
        by_slug = {}
        for p in items:
            if p.id in by_id:
                raise ValueError(f"Duplicate product id: {p.id}")
            if p.slug in by_slug:
                raise ValueError(f"Duplicate product slug: {p.slug}")
            by_id[p.id] = p
            by_slug[p.slug] = p

        self._products: Tuple[Product, ...] = items
        self._by_id = by_id
        self._by_slug = by_slug

        if series is None:
            # first-seen order
            series = dict.fromkeys(p.series for p in items if p.series)
        self._series: Tuple[str, ...] = tuple(series)

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> Sequence[Product]:
        return self._products

    def get(self, key: str) -> Optional[Product]:
        return self._by_slug.get(key) or self._by_id.get(key)

    def series_options(self) -> Sequence[str]:
        return self._series

    def featured(self, limit: int) -> List[Product]:
        return list(self._products[:limit])

    def related(self, product: Product, limit: int) -> List[Product]:
        others = [p for p in self._products if p.id != product.id]
        if product.series:
            same = [p for p in others if p.series == product.series]
            others = same + [p for p in others if p.series != product.series]
        return others[:limit]


class CatalogStore:
    """Flask extension holding the app's product repository."""

    def __init__(self, app: Optional[Flask] = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        repo = FixtureRepository(app.config["CATALOG_PRODUCTS"], app.config.get("CATALOG_SERIES"))
        app.extensions["catalog"] = repo
        logger.info("Catalog loaded: %d products, %d series", len(repo), len(repo.series_options()))

    @property
    def repository(self) -> ProductRepository:
        return current_app.extensions["catalog"]
