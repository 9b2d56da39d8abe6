"""Integration tests for the catalog use cases.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from storefront.application.create_product import CreateProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductChanges, ProductSpec, VariantSpec
from storefront.application.list_products import ListProductsHandler
from storefront.application.manage_category import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    UpdateCategoryHandler,
)
from storefront.application.recount_categories import RecountCategoriesHandler
from storefront.application.show_category import (
    CategoryProductsHandler,
    ListCategoriesHandler,
    ShowCategoryHandler,
)
from storefront.application.show_product import BulkProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.application.update_variant import (
    AdjustVariantStockHandler,
    UpdateVariantHandler,
)
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.category import CategoryType
from storefront.domain.model.value_objects import new_id
from tests.builders import make_category, make_product, make_variant
from tests.fakes import FakeCategoryRepository, FakeProductRepository


@pytest.fixture
def shirts():
    return make_category("Shirts")


@pytest.fixture
def sale():
    return make_category("Summer Sale", CategoryType.COLLECTION, is_featured=True)


@pytest.fixture
def categories(shirts, sale):
    return FakeCategoryRepository([shirts, sale])


@pytest.fixture
def products():
    return FakeProductRepository()


def _spec(category_ids, sku="LS-001", price="49.00", discount_price=None):
    return ProductSpec(
        title="Linen Shirt",
        description="Relaxed fit",
        price=price,
        discount_price=discount_price,
        categories=category_ids,
        sku=sku,
        variants=[VariantSpec("V1", "white", "M", 5)],
        images=["linen.jpg"],
    )


class TestCreateProduct:

    def test_creates_and_counts(self, products, categories, shirts):
        dto = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        assert dto.price == "49.00"
        assert products.get_by_id(dto.id) is not None
        assert categories.get_by_id(shirts.id).product_count == 1

    def test_duplicate_sku_rejected(self, products, categories, shirts):
        handler = CreateProductHandler(products, categories)
        handler.handle(_spec([shirts.id]))
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle(_spec([shirts.id]))

    def test_discount_not_below_price_rejected(self, products, categories, shirts):
        with pytest.raises(ValidationError, match="Discount price"):
            CreateProductHandler(products, categories).handle(
                _spec([shirts.id], price="10.00", discount_price="10.00")
            )
        assert products.list_all() == []
        assert categories.get_by_id(shirts.id).product_count == 0

    def test_unknown_category_rejected(self, products, categories):
        missing = new_id()
        with pytest.raises(ValidationError, match=f"Categories not found: {missing}"):
            CreateProductHandler(products, categories).handle(_spec([missing]))

    def test_malformed_category_rejected(self, products, categories):
        with pytest.raises(ValidationError, match="Invalid category IDs: bogus"):
            CreateProductHandler(products, categories).handle(_spec(["bogus"]))


class TestUpdateAndDeleteProduct:

    def test_category_change_moves_counters(self, products, categories, shirts, sale):
        created = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        UpdateProductHandler(products, categories).handle(
            created.id, ProductChanges(categories=[sale.id])
        )
        assert categories.get_by_id(shirts.id).product_count == 0
        assert categories.get_by_id(sale.id).product_count == 1

    def test_partial_update(self, products, categories, shirts):
        created = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        dto = UpdateProductHandler(products, categories).handle(
            created.id, ProductChanges(title="Linen Shirt v2", discount_price="39.00")
        )
        assert dto.title == "Linen Shirt v2"
        assert dto.discount_price == "39.00"
        assert dto.price == "49.00"

    def test_clear_discount_price(self, products, categories, shirts):
        created = CreateProductHandler(products, categories).handle(
            _spec([shirts.id], discount_price="39.00")
        )
        dto = UpdateProductHandler(products, categories).handle(
            created.id, ProductChanges(clear_discount_price=True)
        )
        assert dto.discount_price is None
        assert products.get_by_id(created.id).unit_price.plain == "49.00"

    def test_still_editable_after_last_category_deleted(self, products, categories, shirts):
        created = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        DeleteCategoryHandler(categories, products).handle(shirts.id)
        assert products.get_by_id(created.id).categories == []

        dto = UpdateProductHandler(products, categories).handle(
            created.id, ProductChanges(price="25.00")
        )
        assert dto.price == "25.00"
        assert dto.categories == []

    def test_delete_is_soft_and_decrements(self, products, categories, shirts):
        created = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        DeleteProductHandler(products, categories).handle(created.id)
        assert products.get_by_id(created.id).is_deleted
        assert categories.get_by_id(shirts.id).product_count == 0
        with pytest.raises(EntityNotFoundError):
            ShowProductHandler(products).handle(created.id)

    def test_delete_twice_rejected(self, products, categories, shirts):
        created = CreateProductHandler(products, categories).handle(_spec([shirts.id]))
        handler = DeleteProductHandler(products, categories)
        handler.handle(created.id)
        with pytest.raises(EntityNotFoundError):
            handler.handle(created.id)

    def test_show_malformed_id(self, products):
        with pytest.raises(ValidationError, match="Invalid product ID"):
            ShowProductHandler(products).handle("nope")


class TestListProducts:

    def test_pagination(self, categories, shirts):
        repo = FakeProductRepository(
            [make_product(title=f"Shirt {i}", categories=[shirts.id]) for i in range(5)]
        )
        page = ListProductsHandler(repo, categories).handle(page=2, limit=2)
        assert page.results == 2
        assert page.total_products == 5
        assert page.total_pages == 3

    def test_filter_by_slug_requires_all(self, categories, shirts, sale):
        both = make_product(title="Both", categories=[shirts.id, sale.id])
        only = make_product(title="Only", categories=[shirts.id])
        repo = FakeProductRepository([both, only])
        page = ListProductsHandler(repo, categories).handle(categories=["shirts", sale.id])
        assert [p.title for p in page.products] == ["Both"]

    def test_unknown_category_filter(self, products, categories):
        with pytest.raises(ValidationError, match="One or more categories not found"):
            ListProductsHandler(products, categories).handle(categories=["nope"])

    def test_search_matches_title_or_category_name(self, categories, shirts, sale):
        by_title = make_product(title="Summer Hat", categories=[shirts.id])
        by_category = make_product(title="Sandals", categories=[sale.id])
        other = make_product(title="Coat", categories=[shirts.id])
        repo = FakeProductRepository([by_title, by_category, other])
        page = ListProductsHandler(repo, categories).handle(search="summer")
        assert {p.title for p in page.products} == {"Summer Hat", "Sandals"}

    def test_deleted_products_hidden(self, categories, shirts):
        gone = make_product(categories=[shirts.id])
        gone.soft_delete()
        page = ListProductsHandler(FakeProductRepository([gone]), categories).handle()
        assert page.total_products == 0


class TestBulkProducts:

    def test_returns_found_products(self):
        a, b = make_product(title="A"), make_product(title="B")
        dtos = BulkProductsHandler(FakeProductRepository([a, b])).handle([a.id, b.id, new_id()])
        assert {d.title for d in dtos} == {"A", "B"}

    @pytest.mark.parametrize("bad", [[], "abc", None])
    def test_requires_non_empty_list(self, bad):
        with pytest.raises(ValidationError, match="array of product IDs"):
            BulkProductsHandler(FakeProductRepository()).handle(bad)

    def test_malformed_ids_rejected(self):
        with pytest.raises(ValidationError, match="Invalid product IDs: x"):
            BulkProductsHandler(FakeProductRepository()).handle(["x"])


class TestVariantHandlers:

    def test_upsert_and_adjust(self):
        product = make_product(variants=[make_variant("V1", stock=2)])
        repo = FakeProductRepository([product])
        UpdateVariantHandler(repo).handle(product.id, "V2", color="blue", size="L", stock=1)
        dto = AdjustVariantStockHandler(repo).handle(product.id, "V1", 3)
        assert {v.variant_id: v.stock for v in dto.variants} == {"V1": 5, "V2": 1}

    def test_adjust_below_zero_not_saved(self):
        product = make_product(variants=[make_variant("V1", stock=2)])
        repo = FakeProductRepository([product])
        with pytest.raises(InsufficientStockError):
            AdjustVariantStockHandler(repo).handle(product.id, "V1", -3)
        assert repo.get_by_id(product.id).find_variant("V1").stock == 2

    @pytest.mark.parametrize("change", [0, 1.5, True])
    def test_adjust_requires_non_zero_int(self, change):
        product = make_product()
        with pytest.raises(ValidationError, match="non-zero integer"):
            AdjustVariantStockHandler(FakeProductRepository([product])).handle(
                product.id, "V1", change
            )


class TestCategoryHandlers:

    def test_create_generates_slug(self, categories):
        dto = CreateCategoryHandler(categories).handle(name="Women's Shoes", type="product")
        assert dto.slug == "womens-shoes"
        assert ShowCategoryHandler(categories).handle("womens-shoes").id == dto.id

    def test_duplicate_slug_rejected(self, categories):
        with pytest.raises(ValidationError):
            CreateCategoryHandler(categories).handle(name="shirts", type="product")

    def test_unknown_parent_rejected(self, categories):
        with pytest.raises(ValidationError, match="Parent category does not exist"):
            CreateCategoryHandler(categories).handle(name="Tees", type="product", parent=new_id())

    def test_rename_updates_slug(self, categories, shirts):
        dto = UpdateCategoryHandler(categories).handle(shirts.id, name="Dress Shirts")
        assert dto.slug == "dress-shirts"

    def test_clear_parent(self, categories, shirts, sale):
        handler = UpdateCategoryHandler(categories)
        assert handler.handle(shirts.id, parent=sale.id).parent == sale.id
        assert handler.handle(shirts.id, clear_parent=True).parent is None

    def test_list_filters(self, categories):
        assert [c.name for c in ListCategoriesHandler(categories).handle(featured=True)] == [
            "Summer Sale"
        ]
        assert [c.name for c in ListCategoriesHandler(categories).handle(type="product")] == [
            "Shirts"
        ]

    def test_show_unknown_slug(self, categories):
        with pytest.raises(EntityNotFoundError, match="slug"):
            ShowCategoryHandler(categories).handle("nope")

    def test_delete_cascades_to_products(self, categories, products, shirts, sale):
        both = CreateProductHandler(products, categories).handle(_spec([shirts.id, sale.id]))
        assert categories.get_by_id(shirts.id).product_count == 1

        DeleteCategoryHandler(categories, products).handle(sale.id)

        assert categories.get_by_id(sale.id) is None
        assert products.get_by_id(both.id).categories == [shirts.id]
        assert categories.get_by_id(shirts.id).product_count == 1

    def test_delete_unknown(self, categories, products):
        with pytest.raises(EntityNotFoundError):
            DeleteCategoryHandler(categories, products).handle(new_id())

    def test_category_products_sorted(self, categories, shirts):
        repo = FakeProductRepository(
            [
                make_product(title="Cheap", price="5.00", categories=[shirts.id]),
                make_product(title="Pricey", price="50.00", categories=[shirts.id]),
            ]
        )
        page = CategoryProductsHandler(categories, repo).handle("shirts", sort="-price")
        assert [p.title for p in page.products] == ["Pricey", "Cheap"]

    def test_category_products_bad_sort(self, categories, products):
        with pytest.raises(ValidationError, match="Cannot sort by"):
            CategoryProductsHandler(categories, products).handle("shirts", sort="colour")

    def test_recount(self, categories, shirts):
        repo = FakeProductRepository([make_product(categories=[shirts.id])])
        corrections = RecountCategoriesHandler(categories, repo).handle()
        assert corrections == {"shirts": (0, 1)}
