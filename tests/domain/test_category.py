"""Unit tests for the Category aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.category import DEFAULT_IMAGE, CategoryType, slugify
from tests.builders import make_category


class TestSlugify:

    @pytest.mark.parametrize(
        "name, slug",
        [
            ("Shirts", "shirts"),
            ("Women's Shoes", "womens-shoes"),
            ("  Summer   Sale 2024! ", "summer-sale-2024"),
        ],
    )
    def test_slugify(self, name, slug):
        assert slugify(name) == slug


class TestCategory:

    def test_create_derives_slug_and_defaults(self):
        category = make_category("Summer Sale", CategoryType.COLLECTION)
        assert category.slug == "summer-sale"
        assert category.image == DEFAULT_IMAGE
        assert category.product_count == 0

    def test_rename_regenerates_slug(self):
        category = make_category("Shirts")
        category.rename("Dress Shirts")
        assert category.slug == "dress-shirts"

    @pytest.mark.parametrize("name", ["x", "y" * 51, "   "])
    def test_bad_names_rejected(self, name):
        with pytest.raises(ValidationError):
            make_category(name)

    def test_cannot_be_own_parent(self):
        with pytest.raises(ValidationError, match="own parent"):
            make_category(id="c1", parent="c1")

    def test_increment_and_decrement(self):
        category = make_category()
        category.increment()
        category.increment(2)
        category.increment(-1)
        assert category.product_count == 2

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="Invalid category type"):
            CategoryType.parse("gadget")
