"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ros.application.add_product import AddProductHandler
from ros.application.update_product import UpdateProductHandler
from ros.domain.exceptions import DomainException
from ros.domain.model.product import (
    Dessert,
    Drink,
    Food,
    IceCreamType,
    MilkCocktail,
    ProductKind,
)
from ros.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in ProductKind], case_sensitive=False),
    default=ProductKind.FOOD.value,
    show_default=True,
    help="Kind of product.",
)
@click.option("--calorie", required=True, type=int, help="Calories per portion (kcal).")
@click.option("--weight", "weight_grams", required=True, help="Portion weight in grams.")
@click.option("--description", default=None, help="Short description.")
@click.option("--category", "categories", multiple=True, help="Menu category (repeatable).")
@click.option("--ingredient", "ingredients", multiple=True, help="Ingredient of a FOOD (repeatable).")
@click.option("--alcohol", default="0", show_default=True, help="Alcohol percentage of a drink.")
@click.option("--carbonated", is_flag=True, default=False, help="The drink is carbonated.")
@click.option("--sugar", "sugar_per_gram", default="0", show_default=True, help="Sugar per gram of product.")
@click.option(
    "--ice-cream",
    "ice_cream_type",
    type=click.Choice([t.value for t in IceCreamType], case_sensitive=False),
    default=None,
    help="Ice cream of a MILK_COCKTAIL.",
)
def product_add(
    name: str,
    price: str,
    kind: str,
    calorie: int,
    weight_grams: str,
    description: str | None,
    categories: tuple[str, ...],
    ingredients: tuple[str, ...],
    alcohol: str,
    carbonated: bool,
    sugar_per_gram: str,
    ice_cream_type: str | None,
) -> None:
    """Add a new product to the menu."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            price=price,
            calorie=calorie,
            weight_grams=weight_grams,
            kind=kind,
            description=description,
            categories=list(categories),
            ingredients=list(ingredients),
            alcohol=alcohol,
            carbonated=carbonated,
            sugar_per_gram=sugar_per_gram,
            ice_cream_type=ice_cream_type,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products on the menu."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Kind':<14} {'Price':>10} {'Prep':>7}  Categories")
    click.echo("-" * 76)
    for p in products:
        categories = ", ".join(c.name for c in p.categories)
        prep = f"{p.estimated_preparation_time():.1f}m"
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.kind.value:<14} {str(p.price):>10} {prep:>7}  {categories}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to ${price}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product with its kind-specific details."""
    product = product_repository().get_by_id(product_id)
    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")

    click.echo(f"Product #{product.id}  {product.name} ({product.kind.value})")
    if product.description:
        click.echo(f"  {product.description}")
    click.echo(f"Price:       {product.price}")
    click.echo(f"Nutrition:   {product.calorie} kcal, {product.weight_grams} g")
    if isinstance(product, Food):
        click.echo(f"Ingredients: {', '.join(product.ingredients)}")
        click.echo(f"Vegetarian:  {'yes' if product.is_vegetarian else 'no'}")
    if isinstance(product, Drink):
        click.echo(f"Alcohol:     {product.alcohol}%")
        click.echo(f"Carbonated:  {'yes' if product.carbonated else 'no'}")
    if isinstance(product, MilkCocktail):
        click.echo(f"Ice cream:   {product.ice_cream_type.value}")
    if isinstance(product, (Dessert, MilkCocktail)):
        click.echo(f"Sugar:       {product.total_sugar():.1f} g")
    click.echo(f"Preparation: {product.estimated_preparation_time():.1f} min")
