"""Unit tests for the product variants, Category and Image associations."""

from decimal import Decimal

import pytest

from ros.domain.exceptions import ValidationError
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


def _product(pid: str = "1", name: str = "Borscht") -> Product:
    return Food.create(
        id=pid, name=name, price=Money.of("6.00"), calorie=250,
        weight_grams=300, ingredients=["beetroot", "broth"],
    )


def _food(*ingredients: str) -> Food:
    return Food.create(
        id="1", name="Pierogi", price=Money.of("7.50"), calorie=450,
        weight_grams=250, ingredients=list(ingredients),
    )


def _drink(**kwargs) -> Drink:
    fields = dict(id="2", name="Lemonade", price=Money.of("3.00"), calorie=120, weight_grams=330)
    fields.update(kwargs)
    return Drink.create(**fields)


class TestProduct:

    def test_create_trims_name(self):
        product = Food.create(
            id="1", name="  Borscht ", price=Money.of("6"), calorie=250,
            weight_grams=300, ingredients=["beetroot"],
        )
        assert product.name == "Borscht"
        assert product.kind == ProductKind.FOOD

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Food.create(
                id="1", name=" ", price=Money.of("6"), calorie=250,
                weight_grams=300, ingredients=["beetroot"],
            )

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError, match="description"):
            Food.create(
                id="1", name="Borscht", price=Money.of("6"), calorie=250,
                weight_grams=300, ingredients=["beetroot"], description="  ",
            )

    def test_price_must_be_money(self):
        with pytest.raises(ValidationError, match="price is required"):
            _drink(price="4.00")

    @pytest.mark.parametrize("calorie", [0, -10, True, "300"])
    def test_calorie_must_be_at_least_one(self, calorie):
        with pytest.raises(ValidationError, match="Calorie"):
            _drink(calorie=calorie)

    @pytest.mark.parametrize("weight", [0, "0.5", -1])
    def test_weight_must_be_at_least_one_gram(self, weight):
        with pytest.raises(ValidationError, match="Weight"):
            _drink(weight_grams=weight)

    @pytest.mark.parametrize("weight", ["heavy", "NaN", None])
    def test_weight_must_be_a_number(self, weight):
        with pytest.raises(ValidationError, match="must be a number"):
            _drink(weight_grams=weight)

    def test_base_product_is_abstract(self):
        with pytest.raises(TypeError):
            Product(
                id="1", name="Borscht", price=Money.of("6"), calorie=250,
                weight_grams=Decimal("300"),
            )

    def test_update_price(self):
        product = _product()
        product.update_price(Money.of("6.50"))
        assert product.price == Money.of("6.50")

    def test_update_price_requires_money(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.update_price(Decimal("6.50"))
        assert product.price == Money.of("6.00")


class TestFood:

    def test_preparation_time_per_ingredient(self):
        assert _food("dough", "potato").estimated_preparation_time() == Decimal("13")

    def test_sauce_adds_a_minute(self):
        assert _food("dough", "potato", "Sauce").estimated_preparation_time() == Decimal("18")

    def test_ingredients_trimmed(self):
        assert _food(" dough ", "", "cheese").ingredients == ["dough", "cheese"]

    def test_at_least_one_ingredient(self):
        with pytest.raises(ValidationError, match="at least one ingredient"):
            _food()

    def test_vegetarian(self):
        assert _food("dough", "cheese").is_vegetarian
        assert not _food("dough", "Bacon").is_vegetarian

    def test_has_ingredient_ignores_case(self):
        assert _food("Dough").has_ingredient(" dough")


class TestDrink:

    def test_plain_drink(self):
        drink = _drink()
        assert drink.kind == ProductKind.DRINK
        assert not drink.is_alcoholic
        assert drink.estimated_preparation_time() == Decimal("0.5")

    def test_alcoholic_and_carbonated(self):
        drink = _drink(alcohol="4.5", carbonated=True)
        assert drink.is_alcoholic
        assert drink.estimated_preparation_time() == Decimal("2.0")

    def test_negative_alcohol_rejected(self):
        with pytest.raises(ValidationError, match="Alcohol percentage must be non-negative"):
            _drink(alcohol="-1")


class TestDessert:

    def _sernik(self, sugar="0.2") -> Dessert:
        return Dessert.create(
            id="3", name="Sernik", price=Money.of("5.00"), calorie=380,
            weight_grams=100, sugar_per_gram=sugar,
        )

    def test_total_sugar_and_preparation_time(self):
        dessert = self._sernik()
        assert dessert.kind == ProductKind.DESSERT
        assert dessert.total_sugar() == Decimal("20")
        assert dessert.estimated_preparation_time() == Decimal("5.2")

    def test_sugar_free(self):
        assert self._sernik("0").estimated_preparation_time() == Decimal("5")

    def test_negative_sugar_rejected(self):
        with pytest.raises(ValidationError, match="Sugar per gram"):
            self._sernik("-0.1")


class TestMilkCocktail:

    def _shake(self, **kwargs) -> MilkCocktail:
        fields = dict(
            id="4", name="Shake", price=Money.of("6.50"), calorie=520, weight_grams=300,
            ice_cream_type=IceCreamType.STRAWBERRY, sugar_per_gram="0.1",
        )
        fields.update(kwargs)
        return MilkCocktail.create(**fields)

    def test_is_a_drink(self):
        shake = self._shake()
        assert isinstance(shake, Drink)
        assert shake.kind == ProductKind.MILK_COCKTAIL
        assert shake.ice_cream_type == IceCreamType.STRAWBERRY

    def test_sugar_drives_preparation_time(self):
        shake = self._shake()
        assert shake.total_sugar() == Decimal("30")
        assert shake.estimated_preparation_time() == Decimal("11")

    def test_ice_cream_required(self):
        with pytest.raises(ValidationError, match="Ice cream type is required"):
            self._shake(ice_cream_type=None)

    def test_negative_sugar_rejected(self):
        with pytest.raises(ValidationError, match="Sugar per gram"):
            self._shake(sugar_per_gram="-1")


class TestCategories:

    def test_link_is_bidirectional(self):
        soups, product = Category("Soups"), _product()
        product.add_category(soups)
        assert soups.products == (product,)
        assert product.categories == (soups,)

    def test_link_from_category_side(self):
        soups, product = Category("Soups"), _product()
        soups.add_product(product)
        assert product.categories == (soups,)

    def test_adding_twice_is_idempotent(self):
        soups, product = Category("Soups"), _product()
        product.add_category(soups)
        soups.add_product(product)
        assert len(soups.products) == 1 and len(product.categories) == 1

    def test_remove_unlinks_both_sides(self):
        soups, product = Category("Soups"), _product()
        product.add_category(soups)
        soups.remove_product(product)
        assert soups.products == () and product.categories == ()

    def test_set_categories_replaces(self):
        soups, vegan, product = Category("Soups"), Category("Vegan"), _product()
        product.add_category(soups)
        product.set_categories([vegan])
        assert product.categories == (vegan,)
        assert soups.products == ()

    def test_blank_category_rejected(self):
        with pytest.raises(ValidationError):
            Category(" ")


class TestImages:

    def test_add_and_preview(self):
        product = _product()
        photo = Image("borscht.png", ImageFormat.PNG, preview=True)
        product.add_image(photo)
        assert photo.product is product
        assert product.preview_image is photo

    def test_image_of_another_product_rejected(self):
        photo = Image("borscht.jpg", ImageFormat.JPEG)
        _product("1").add_image(photo)
        with pytest.raises(ValidationError, match="another product"):
            _product("2", "Kompot").add_image(photo)

    def test_remove_image(self):
        product = _product()
        photo = Image("borscht.jpg", ImageFormat.JPEG)
        product.add_image(photo)
        product.remove_image(photo)
        assert product.images == () and photo.product is None

    @pytest.mark.parametrize(
        "file_name, expected",
        [("a.JPG", ImageFormat.JPEG), ("a.jpeg", ImageFormat.JPEG), ("a.png", ImageFormat.PNG)],
    )
    def test_format_from_file_name(self, file_name, expected):
        assert ImageFormat.from_file_name(file_name) is expected

    def test_unsupported_format_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported"):
            ImageFormat.from_file_name("menu.gif")
