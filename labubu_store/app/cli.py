from __future__ import annotations

import click
from flask import Blueprint, current_app

from labubu_store.app.extensions import catalog
from labubu_store.app.models import ListingQuery, SortKey
from labubu_store.modules.catalog.listing import paginate

cli_bp = Blueprint("catalog_cli", __name__, cli_group="catalog")


@cli_bp.cli.command("list")
@click.option("--search", default="", help="Case-insensitive name filter.")
@click.option("--series", multiple=True, help="Series label; repeat to select several.")
@click.option("--sort", "sort_key", type=click.Choice([k.value for k in SortKey]), default=SortKey.NEWEST.value)
@click.option("--page", type=int, default=1, show_default=True)
def list_products(search: str, series: tuple, sort_key: str, page: int) -> None:
    """Print one page of the product listing."""
    if page < 1:
        raise click.BadParameter("page must be >= 1", param_hint="--page")

    query = ListingQuery(search_term=search, selected_series=frozenset(series), sort_key=SortKey(sort_key), page=page)
    result = paginate(catalog.repository.all(), query, current_app.config["PAGE_SIZE"])

    if result.is_empty:
        click.echo("No products found.")
        return
    if page > result.total_pages:
        raise click.BadParameter(f"only {result.total_pages} page(s)", param_hint="--page")

    for p in result.items:
        flags = " ".join(f for f, on in (("NEW", p.is_new), ("SOLD OUT", p.is_out_of_stock)) if on)
        click.echo(f"{p.slug:<28} {p.price:>8}  {p.series or '-':<18} {flags}".rstrip())
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total_items} products)")


@cli_bp.cli.command("show")
@click.argument("key")
def show_product(key: str) -> None:
    """Print one product by slug or id."""
    p = catalog.repository.get(key)
    if p is None:
        raise click.ClickException(f"Product not found: {key}")

    click.echo(p.name)
    click.echo(f"  slug:   {p.slug}")
    click.echo(f"  price:  {p.price}")
    click.echo(f"  series: {p.series or '-'}")
    click.echo(f"  status: {'Out of Stock' if p.is_out_of_stock else 'In Stock'}")
    if p.description:
        click.echo(f"  {p.description}")
