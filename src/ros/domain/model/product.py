"""Product aggregate and the catalog entities hanging off it.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the menu. Categories
and images are linked to products in both directions; every link goes
through the ``add_*`` / ``remove_*`` entry points so both sides stay in
sync.

``Product`` itself is abstract. The menu is made of its variants:

    Food          ingredients
    Drink         alcohol, carbonation
    Dessert       sugar per gram
    MilkCocktail  a Drink that is also sweet: ice cream type, sugar per gram

Each variant knows how long it takes to prepare; the sweet ones also
report their total sugar.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from ros.domain.exceptions import ValidationError
from ros.domain.model.value_objects import Money

if TYPE_CHECKING:
    from ros.domain.model.order_line import OrderLine


class ProductKind(Enum):
    FOOD = "FOOD"
    DRINK = "DRINK"
    DESSERT = "DESSERT"
    MILK_COCKTAIL = "MILK_COCKTAIL"


class IceCreamType(Enum):
    VANILLA = "VANILLA"
    CHOCOLATE = "CHOCOLATE"
    STRAWBERRY = "STRAWBERRY"


class ImageFormat(Enum):
    JPEG = "JPEG"
    PNG = "PNG"

    @staticmethod
    def from_file_name(file_name: str) -> ImageFormat:
        suffix = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
        if suffix in ("jpg", "jpeg"):
            return ImageFormat.JPEG
        if suffix == "png":
            return ImageFormat.PNG
        raise ValidationError(f"Unsupported image format: '{file_name}'")


# ---------------------------------------------------------------------------
# Preparation time constants (minutes)
# ---------------------------------------------------------------------------
FOOD_BASE_MINUTES = Decimal("5")
FOOD_MINUTES_PER_INGREDIENT = Decimal("4")
FOOD_SAUCE_MINUTES = Decimal("1")

DRINK_BASE_MINUTES = Decimal("0.5")
DRINK_ALCOHOL_MINUTES = Decimal("1")
DRINK_CARBONATION_MINUTES = Decimal("0.5")

DESSERT_BASE_MINUTES = Decimal("5")
DESSERT_MINUTES_PER_SUGAR_GRAM = Decimal("0.01")

MILK_COCKTAIL_BASE_MINUTES = Decimal("5")
MILK_COCKTAIL_MINUTES_PER_SUGAR_GRAM = Decimal("0.2")

NON_VEGETARIAN_INGREDIENTS = ("meat", "chicken", "fish", "bacon", "ham", "pork", "beef")


def _to_decimal(value: int | str | Decimal, label: str) -> Decimal:
    """Coerce a measurement typed by a person into a finite Decimal."""
    if isinstance(value, bool) or not isinstance(value, (int, str, Decimal)):
        raise ValidationError(f"{label} must be a number, got {type(value).__name__}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{label} must be a number, got {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"{label} must be a number, got {value!r}")
    return result


def _non_negative(value: int | str | Decimal, label: str) -> Decimal:
    amount = _to_decimal(value, label)
    if amount < 0:
        raise ValidationError(f"{label} must be non-negative")
    return amount


@dataclass(eq=False)
class Category:
    """A menu section (e.g. "Soups"). Identity-compared."""

    name: str
    _products: list[Product] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Category name must not be blank")
        self.name = self.name.strip()

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    def add_product(self, product: Product) -> None:
        if product is None:
            raise ValidationError("Product must not be None")
        if product not in self._products:
            self._products.append(product)
            product.add_category(self)

    def remove_product(self, product: Product) -> None:
        if product in self._products:
            self._products.remove(product)
            product.remove_category(self)


@dataclass(eq=False)
class Image:
    """A picture of a product. Only the association is modelled here."""

    file_name: str
    format: ImageFormat
    preview: bool = False
    product: Product | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.file_name or not self.file_name.strip():
            raise ValidationError("Image file name must not be blank")


@dataclass(eq=False)
class Product(ABC):
    """A dish or drink on the menu.

    This is an aggregate root. The order lines seen through
    ``order_lines`` are a reporting-only back-reference; the orders own
    them. Variants are built with their own ``create()`` factories, which
    share the checks in ``_checked_common()``.
    """

    kind: ClassVar[ProductKind]

    id: str
    name: str
    price: Money
    calorie: int
    weight_grams: Decimal
    description: str | None = None
    _categories: list[Category] = field(default_factory=list, init=False, repr=False)
    _images: list[Image] = field(default_factory=list, init=False, repr=False)
    _order_lines: list[OrderLine] = field(default_factory=list, init=False, repr=False)

    @staticmethod
    def _checked_common(
        id: str,
        name: str,
        price: Money,
        calorie: int,
        weight_grams: int | str | Decimal,
        description: str | None,
    ) -> dict:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(price, Money):
            raise ValidationError("Product price is required")
        if isinstance(calorie, bool) or not isinstance(calorie, int) or calorie < 1:
            raise ValidationError("Calorie must be at least 1")
        weight = _to_decimal(weight_grams, "Weight")
        if weight < 1:
            raise ValidationError("Weight must be at least 1 gram")
        if description is not None and not description.strip():
            raise ValidationError("Product description must not be blank if present")
        return dict(
            id=id,
            name=name.strip(),
            price=price,
            calorie=calorie,
            weight_grams=weight,
            description=description.strip() if description else None,
        )

    @abstractmethod
    def estimated_preparation_time(self) -> Decimal:
        """Minutes the kitchen or bar needs for one portion."""

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order lines
        capture a price snapshot when they are added.
        """
        if not isinstance(new_price, Money):
            raise ValidationError("Product price is required")
        self.price = new_price

    # --- Categories -----------------------------------------------------------

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories)

    def add_category(self, category: Category) -> None:
        if category is None:
            raise ValidationError("Category must not be None")
        if category not in self._categories:
            self._categories.append(category)
            category.add_product(self)

    def remove_category(self, category: Category) -> None:
        if category in self._categories:
            self._categories.remove(category)
            category.remove_product(self)

    def set_categories(self, categories: list[Category]) -> None:
        for old in list(self._categories):
            self.remove_category(old)
        for category in categories:
            self.add_category(category)

    # --- Images ---------------------------------------------------------------

    @property
    def images(self) -> tuple[Image, ...]:
        return tuple(self._images)

    @property
    def preview_image(self) -> Image | None:
        return next((image for image in self._images if image.preview), None)

    def add_image(self, image: Image) -> None:
        if image is None:
            raise ValidationError("Image must not be None")
        if image.product is not None and image.product is not self:
            raise ValidationError("Image is attached to another product")
        if image not in self._images:
            self._images.append(image)
        image.product = self

    def remove_image(self, image: Image) -> None:
        if image in self._images:
            self._images.remove(image)
            image.product = None

    # --- Historical order lines -----------------------------------------------

    @property
    def order_lines(self) -> tuple[OrderLine, ...]:
        return tuple(self._order_lines)

    def _link_line(self, line: OrderLine) -> None:
        if line not in self._order_lines:
            self._order_lines.append(line)

    def _unlink_line(self, line: OrderLine) -> None:
        if line in self._order_lines:
            self._order_lines.remove(line)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Food(Product):
    kind: ClassVar[ProductKind] = ProductKind.FOOD

    ingredients: list[str] = field(default_factory=list)

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        calorie: int,
        weight_grams: int | str | Decimal,
        ingredients: Iterable[str],
        description: str | None = None,
    ) -> Food:
        common = Product._checked_common(id, name, price, calorie, weight_grams, description)
        food = Food(**common)
        food.set_ingredients(ingredients)
        return food

    def set_ingredients(self, ingredients: Iterable[str]) -> None:
        cleaned = [i.strip() for i in ingredients or () if i and i.strip()]
        if not cleaned:
            raise ValidationError("Food must have at least one ingredient")
        self.ingredients = cleaned

    def has_ingredient(self, ingredient: str) -> bool:
        return any(i.lower() == ingredient.strip().lower() for i in self.ingredients)

    @property
    def is_vegetarian(self) -> bool:
        return not any(self.has_ingredient(i) for i in NON_VEGETARIAN_INGREDIENTS)

    def estimated_preparation_time(self) -> Decimal:
        minutes = FOOD_BASE_MINUTES + FOOD_MINUTES_PER_INGREDIENT * len(self.ingredients)
        if self.has_ingredient("sauce"):
            minutes += FOOD_SAUCE_MINUTES
        return minutes


@dataclass(eq=False)
class Drink(Product):
    kind: ClassVar[ProductKind] = ProductKind.DRINK

    alcohol: Decimal = Decimal("0")
    carbonated: bool = False

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        calorie: int,
        weight_grams: int | str | Decimal,
        alcohol: int | str | Decimal = 0,
        carbonated: bool = False,
        description: str | None = None,
    ) -> Drink:
        common = Product._checked_common(id, name, price, calorie, weight_grams, description)
        return Drink(
            alcohol=_non_negative(alcohol, "Alcohol percentage"),
            carbonated=bool(carbonated),
            **common,
        )

    @property
    def is_alcoholic(self) -> bool:
        return self.alcohol > 0

    def estimated_preparation_time(self) -> Decimal:
        minutes = DRINK_BASE_MINUTES
        if self.is_alcoholic:
            minutes += DRINK_ALCOHOL_MINUTES
        if self.carbonated:
            minutes += DRINK_CARBONATION_MINUTES
        return minutes


@dataclass(eq=False)
class Dessert(Product):
    kind: ClassVar[ProductKind] = ProductKind.DESSERT

    sugar_per_gram: Decimal = Decimal("0")

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        calorie: int,
        weight_grams: int | str | Decimal,
        sugar_per_gram: int | str | Decimal,
        description: str | None = None,
    ) -> Dessert:
        common = Product._checked_common(id, name, price, calorie, weight_grams, description)
        return Dessert(sugar_per_gram=_non_negative(sugar_per_gram, "Sugar per gram"), **common)

    def total_sugar(self) -> Decimal:
        """Grams of sugar in one portion."""
        return self.sugar_per_gram * self.weight_grams

    def estimated_preparation_time(self) -> Decimal:
        return DESSERT_BASE_MINUTES + self.total_sugar() * DESSERT_MINUTES_PER_SUGAR_GRAM


@dataclass(eq=False)
class MilkCocktail(Drink):
    """A drink served as a dessert; it is both a Drink and sweet."""

    kind: ClassVar[ProductKind] = ProductKind.MILK_COCKTAIL

    ice_cream_type: IceCreamType = IceCreamType.VANILLA
    sugar_per_gram: Decimal = Decimal("0")

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        calorie: int,
        weight_grams: int | str | Decimal,
        ice_cream_type: IceCreamType,
        sugar_per_gram: int | str | Decimal,
        alcohol: int | str | Decimal = 0,
        carbonated: bool = False,
        description: str | None = None,
    ) -> MilkCocktail:
        common = Product._checked_common(id, name, price, calorie, weight_grams, description)
        if not isinstance(ice_cream_type, IceCreamType):
            raise ValidationError("Ice cream type is required")
        return MilkCocktail(
            alcohol=_non_negative(alcohol, "Alcohol percentage"),
            carbonated=bool(carbonated),
            ice_cream_type=ice_cream_type,
            sugar_per_gram=_non_negative(sugar_per_gram, "Sugar per gram"),
            **common,
        )

    def total_sugar(self) -> Decimal:
        return self.sugar_per_gram * self.weight_grams

    def estimated_preparation_time(self) -> Decimal:
        return MILK_COCKTAIL_BASE_MINUTES + self.total_sugar() * MILK_COCKTAIL_MINUTES_PER_SUGAR_GRAM

