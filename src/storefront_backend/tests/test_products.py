"""
Tests for product creation, lookup and the owner gate on mutations.
"""

import pytest

from storefront_backend.business_logic.products import (
    create_product,
    delete_product,
    find_product_by_id,
    update_product,
)
from storefront_backend.exceptions import (
    BadRequestException,
    InternalServerException,
    UnauthorizedException,
)
from storefront_backend.interfaces.products import ProductCreate, ProductUpdate
from storefront_backend.model import Product
from storefront_backend.repositories import DuplicateError, ProductRepository


@pytest.fixture
def shop(make_user, make_company, make_category, make_product):
    owner = make_user()
    company = make_company(owner=owner)
    category = make_category()
    product = make_product(company, category, price=12.5, title="Lamp")
    return {"owner": owner, "company": company, "category": category, "product": product}


def _reload(db, product_id):
    db.expire_all()
    return db.query(Product).filter(Product.id == product_id).first()


@pytest.mark.unit
class TestCreateProduct:

    def test_create_for_own_company(self, db, shop):
        payload = ProductCreate(
            title="Chair",
            price=99,
            category_id=shop["category"].id,
            attributes={"color": "red"},
        )
        product_id = create_product(shop["owner"].id, payload, db=db, locale="en")

        product = _reload(db, product_id)
        assert product.company_id == shop["company"].id
        assert product.attributes == {"color": "red"}

    def test_user_without_company(self, db, shop, make_user):
        payload = ProductCreate(title="Chair", price=1, category_id=shop["category"].id)
        with pytest.raises(BadRequestException) as exc_info:
            create_product(make_user().id, payload, db=db, locale="en")
        assert exc_info.value.error_code == "user_company_is_null"

    def test_unknown_category_inserts_nothing(self, db, shop):
        before = db.query(Product).count()
        payload = ProductCreate(title="Chair", price=1, category_id=9999)

        with pytest.raises(BadRequestException) as exc_info:
            create_product(shop["owner"].id, payload, db=db, locale="en")

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "category_not_found"
        assert db.query(Product).count() == before

    def test_category_removed_before_insert(self, db, shop, monkeypatch):
        def _fk_violation(self, entity):
            raise DuplicateError("Product", {"category_id": entity.category_id})

        monkeypatch.setattr(ProductRepository, "create", _fk_violation)
        payload = ProductCreate(title="Chair", price=1, category_id=shop["category"].id)

        with pytest.raises(BadRequestException) as exc_info:
            create_product(shop["owner"].id, payload, db=db, locale="en")
        assert exc_info.value.error_code == "category_not_found"


@pytest.mark.unit
class TestFindProduct:

    def test_includes_company(self, db, shop):
        product = find_product_by_id(shop["product"].id, db=db, locale="en")
        assert product.title == "Lamp"
        assert product.company.id == shop["company"].id
        assert product.company.user_id == shop["owner"].id

    def test_missing_product(self, db, shop):
        with pytest.raises(BadRequestException) as exc_info:
            find_product_by_id(9999, db=db, locale="en")
        assert exc_info.value.error_code == "product_not_found"

    def test_cached_by_id(self, db, cache, shop):
        find_product_by_id(shop["product"].id, db=db, cache=cache, locale="en")
        assert cache.get_by_key(cache.key("product", shop["product"].id))["title"] == "Lamp"

        db.query(Product).filter(Product.id == shop["product"].id).update({"title": "Renamed"})
        db.commit()

        assert find_product_by_id(shop["product"].id, db=db, cache=cache, locale="en").title == "Lamp"


@pytest.mark.unit
class TestUpdateProduct:

    def test_owner_can_update(self, db, shop):
        update_product(
            shop["owner"].id,
            shop["product"].id,
            ProductUpdate(title="Desk lamp", price=15),
            db=db,
            locale="en",
        )
        product = _reload(db, shop["product"].id)
        assert product.title == "Desk lamp"
        assert product.price == 15

    def test_non_owner_is_unauthorized_and_row_unchanged(self, db, shop, make_user):
        with pytest.raises(UnauthorizedException) as exc_info:
            update_product(
                make_user().id,
                shop["product"].id,
                ProductUpdate(title="Hijacked"),
                db=db,
                locale="en",
            )

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_code == "user_does_not_own_company"
        product = _reload(db, shop["product"].id)
        assert product.title == "Lamp"
        assert product.price == 12.5

    def test_owner_of_another_company_is_unauthorized(self, db, shop, make_company):
        other = make_company(title="Other")
        with pytest.raises(UnauthorizedException):
            update_product(other.user_id, shop["product"].id, ProductUpdate(price=1), db=db, locale="en")

    def test_new_category_must_exist(self, db, shop):
        with pytest.raises(BadRequestException) as exc_info:
            update_product(
                shop["owner"].id,
                shop["product"].id,
                ProductUpdate(category_id=9999),
                db=db,
                locale="en",
            )
        assert exc_info.value.error_code == "category_not_found"
        assert _reload(db, shop["product"].id).category_id == shop["category"].id

    def test_missing_product(self, db, shop):
        with pytest.raises(BadRequestException) as exc_info:
            update_product(shop["owner"].id, 9999, ProductUpdate(title="x"), db=db, locale="en")
        assert exc_info.value.error_code == "product_not_found"

    def test_row_deleted_after_lookup(self, db, cache, shop):
        product_id = shop["product"].id
        # Cache the row, then remove it behind the cache's back
        find_product_by_id(product_id, db=db, cache=cache, locale="en")
        db.query(Product).filter(Product.id == product_id).delete()
        db.commit()

        with pytest.raises(InternalServerException) as exc_info:
            update_product(shop["owner"].id, product_id, ProductUpdate(title="x"), db=db, cache=cache, locale="en")

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == "no_rows_updated"


@pytest.mark.unit
class TestDeleteProduct:

    def test_owner_can_delete(self, db, shop):
        delete_product(shop["owner"].id, shop["product"].id, db=db, locale="en")
        assert _reload(db, shop["product"].id) is None

    def test_non_owner_is_unauthorized(self, db, shop, make_user):
        with pytest.raises(UnauthorizedException):
            delete_product(make_user().id, shop["product"].id, db=db, locale="en")
        assert _reload(db, shop["product"].id) is not None
