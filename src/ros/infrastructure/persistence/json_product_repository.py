"""JSON-file-backed implementation of ProductRepository.

Every record carries a ``kind`` tag; the variant-specific attributes sit
next to the common ones.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from ros.domain.model.product import (
    Category,
    Dessert,
    Drink,
    Food,
    IceCreamType,
    Image,
    ImageFormat,
    MilkCocktail,
    Product,
    ProductKind,
)
from ros.domain.model.value_objects import Money
from ros.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        raw = [item for item in self._load_raw() if item["id"] != product.id]
        raw.append(self._to_raw(product))
        self._persist_raw(raw)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        raw = {
            "id": product.id,
            "kind": product.kind.value,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "calorie": product.calorie,
            "weight_grams": str(product.weight_grams),
            "categories": [c.name for c in product.categories],
            "images": [
                {
                    "file_name": image.file_name,
                    "format": image.format.value,
                    "preview": image.preview,
                }
                for image in product.images
            ],
        }
        if isinstance(product, Food):
            raw["ingredients"] = list(product.ingredients)
        if isinstance(product, Drink):
            raw["alcohol"] = str(product.alcohol)
            raw["carbonated"] = product.carbonated
        if isinstance(product, MilkCocktail):
            raw["ice_cream_type"] = product.ice_cream_type.value
        if isinstance(product, (Dessert, MilkCocktail)):
            raw["sugar_per_gram"] = str(product.sugar_per_gram)
        return raw

    @staticmethod
    def _to_domain(item: dict) -> Product:
        common = dict(
            id=item["id"],
            name=item["name"],
            price=Money(Decimal(item["price"]), item.get("currency", "USD")),
            calorie=item["calorie"],
            weight_grams=Decimal(item["weight_grams"]),
            description=item.get("description"),
        )
        kind = ProductKind(item["kind"])
        if kind == ProductKind.FOOD:
            return Food(ingredients=list(item["ingredients"]), **common)
        if kind == ProductKind.DRINK:
            return Drink(
                alcohol=Decimal(item["alcohol"]), carbonated=item["carbonated"], **common
            )
        if kind == ProductKind.DESSERT:
            return Dessert(sugar_per_gram=Decimal(item["sugar_per_gram"]), **common)
        return MilkCocktail(
            alcohol=Decimal(item["alcohol"]),
            carbonated=item["carbonated"],
            ice_cream_type=IceCreamType(item["ice_cream_type"]),
            sugar_per_gram=Decimal(item["sugar_per_gram"]),
            **common,
        )

    def _load(self) -> dict[str, Product]:
        # Categories are shared between the products of one load.
        categories: dict[str, Category] = {}
        products: dict[str, Product] = {}
        for item in self._load_raw():
            product = self._to_domain(item)
            for name in item.get("categories", []):
                category = categories.setdefault(name.lower(), Category(name))
                product.add_category(category)
            for raw_image in item.get("images", []):
                product.add_image(
                    Image(
                        file_name=raw_image["file_name"],
                        format=ImageFormat(raw_image["format"]),
                        preview=raw_image.get("preview", False),
                    )
                )
            products[product.id] = product
        return products

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, raw: list[dict]) -> None:
        raw.sort(key=lambda item: int(item["id"]) if item["id"].isdigit() else 0)
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
