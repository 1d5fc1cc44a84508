"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal

from ros.domain.exceptions import ValidationError
from ros.domain.model.product import (
    Category,
    Dessert,
    Drink,
    Food,
    IceCreamType,
    MilkCocktail,
    Product,
    ProductKind,
)
from ros.domain.model.value_objects import Money
from ros.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        calorie: int,
        weight_grams: str | Decimal,
        kind: str = "FOOD",
        description: str | None = None,
        categories: list[str] | None = None,
        ingredients: list[str] | None = None,
        alcohol: str | Decimal = "0",
        carbonated: bool = False,
        sugar_per_gram: str | Decimal = "0",
        ice_cream_type: str | None = None,
    ) -> Product:
        """Add a new product to the menu.

        Only the attributes of the chosen *kind* are used: ingredients for
        FOOD, alcohol and carbonation for DRINK, sugar for DESSERT, and all
        of the drink and sugar attributes plus the ice cream for
        MILK_COCKTAIL.
        """
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        try:
            product_kind = ProductKind(kind.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown product kind: {kind!r}") from exc

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        common = dict(
            id=next_id,
            name=name,
            price=Money.of(price),
            calorie=calorie,
            weight_grams=weight_grams,
            description=description,
        )
        if product_kind == ProductKind.FOOD:
            product = Food.create(ingredients=ingredients or [], **common)
        elif product_kind == ProductKind.DRINK:
            product = Drink.create(alcohol=alcohol, carbonated=carbonated, **common)
        elif product_kind == ProductKind.DESSERT:
            product = Dessert.create(sugar_per_gram=sugar_per_gram, **common)
        else:
            product = MilkCocktail.create(
                ice_cream_type=self._ice_cream(ice_cream_type),
                sugar_per_gram=sugar_per_gram,
                alcohol=alcohol,
                carbonated=carbonated,
                **common,
            )

        known = {c.name.lower(): c for p in all_products for c in p.categories}
        for category_name in categories or []:
            category = known.get(category_name.strip().lower()) or Category(category_name)
            product.add_category(category)

        self._product_repo.save(product)
        logger.info(
            "%s #%s '%s' added at %s", product.kind.value, product.id, product.name, product.price
        )
        return product

    @staticmethod
    def _ice_cream(value: str | None) -> IceCreamType:
        if not value:
            raise ValidationError("Ice cream type is required")
        try:
            return IceCreamType(value.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown ice cream type: {value!r}") from exc
