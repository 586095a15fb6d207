"""
Tests for the HTTP surface: routing, query parameter parsing, authentication
and error responses.
"""

import pytest

from storefront_backend.model import Product


@pytest.fixture
def storefront(make_user, make_company, make_category, make_product, make_review):
    owner = make_user()
    company = make_company(owner=owner)
    recent = make_category("Recent")
    other = make_category("Other")
    pinned = make_product(company, recent, price=20, title="Pinned")
    cheaper = make_product(company, other, price=15, title="Cheaper")
    make_product(company, other, price=70, title="Expensive")
    author = make_user()
    review = make_review(pinned, author, rating=3, text="Okay")
    return {
        "owner": owner,
        "company": company,
        "recent": recent,
        "other": other,
        "pinned": pinned,
        "cheaper": cheaper,
        "author": author,
        "review": review,
    }


@pytest.mark.integration
class TestProductRoutes:

    def test_list_with_filters_and_recent_categories(self, client, storefront):
        response = client.get(
            "/products",
            params={"minPrice": 10, "maxPrice": 50, "lastCategories": [storefront["recent"].id]},
        )

        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == [storefront["pinned"].id, storefront["cheaper"].id]
        assert body[0]["category"]["title"] == "Recent"
        assert "reviews" not in body[0]

    def test_repeated_last_categories(self, client, storefront):
        response = client.get(
            "/products?lastCategories={}&lastCategories={}".format(
                storefront["other"].id, storefront["recent"].id
            )
        )
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_sorted_listing(self, client, storefront):
        response = client.get("/products", params={"orderBy": "price", "orderByType": "ASC"})
        prices = [p["price"] for p in response.json()]
        assert prices == sorted(prices)

    def test_invalid_order_by(self, client, storefront):
        response = client.get("/products", params={"orderBy": "secret"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_order_by"

    def test_error_message_is_localized(self, client, storefront):
        response = client.get(
            "/products",
            params={"categoryId": 9999},
            headers={"Accept-Language": "de-DE,de;q=0.9"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Kategorie nicht gefunden"

    def test_invalid_limit_is_a_validation_error(self, client, storefront):
        response = client.get("/products", params={"limit": 0})
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "validation_failed"
        assert body["details"]["validation_errors"]

    def test_get_product(self, client, storefront):
        response = client.get(f"/products/{storefront['pinned'].id}")
        assert response.status_code == 200
        assert response.json()["company"]["id"] == storefront["company"].id

    def test_create_requires_authentication(self, client, storefront):
        payload = {"title": "New", "price": 1, "category_id": storefront["other"].id}
        response = client.post("/products", json=payload)
        assert response.status_code == 401
        assert response.json()["error_code"] == "invalid_authentication"

    def test_owner_creates_product(self, client, storefront, auth_headers):
        payload = {"title": "New", "price": 1, "category_id": storefront["other"].id}
        response = client.post("/products", json=payload, headers=auth_headers(storefront["owner"]))
        assert response.status_code == 201
        assert isinstance(response.json()["id"], int)

    def test_non_owner_update_is_401(self, client, storefront, auth_headers, make_user):
        response = client.patch(
            f"/products/{storefront['pinned'].id}",
            json={"title": "Hijacked"},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "user_does_not_own_company"

    def test_owner_deletes_product(self, client, db, storefront, auth_headers):
        product_id = storefront["cheaper"].id
        response = client.delete(
            f"/products/{product_id}",
            headers=auth_headers(storefront["owner"]),
        )
        assert response.status_code == 204
        db.expire_all()
        assert db.query(Product).filter(Product.id == product_id).first() is None


@pytest.mark.integration
class TestReviewRoutes:

    def test_list_reviews_of_product(self, client, storefront):
        response = client.get(f"/products/{storefront['pinned'].id}/reviews")
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [storefront["review"].id]

    def test_non_author_update_is_403(self, client, storefront, auth_headers):
        response = client.patch(
            f"/reviews/{storefront['review'].id}",
            json={"rating": 1},
            headers=auth_headers(storefront["owner"]),
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "forbidden_update_review"

    def test_author_updates_review(self, client, storefront, auth_headers):
        response = client.patch(
            f"/reviews/{storefront['review'].id}",
            json={"rating": 5},
            headers=auth_headers(storefront["author"]),
        )
        assert response.status_code == 204

    def test_create_review_for_missing_product(self, client, storefront, auth_headers):
        response = client.post(
            "/reviews",
            json={"product_id": 9999, "rating": 4},
            headers=auth_headers(storefront["author"]),
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "product_not_found"

    def test_rating_out_of_range(self, client, storefront, auth_headers):
        response = client.post(
            "/reviews",
            json={"product_id": storefront["pinned"].id, "rating": 9},
            headers=auth_headers(storefront["author"]),
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "validation_failed"


@pytest.mark.integration
class TestAccountFlow:

    def test_register_login_create_company_logout(self, client):
        response = client.post("/users", json={"email": "erin@example.com", "password": "open-sesame"})
        assert response.status_code == 201
        user_id = response.json()["id"]

        response = client.post("/auth/login", json={"email": "erin@example.com", "password": "open-sesame"})
        assert response.status_code == 200
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

        response = client.post("/companies", json={"title": "Erin's"}, headers=headers)
        assert response.status_code == 201

        response = client.get("/companies", headers=headers)
        assert response.json()["user_id"] == user_id

        assert client.post("/auth/logout", headers=headers).status_code == 200
        assert client.get("/companies", headers=headers).status_code == 401

    def test_wrong_password(self, client, make_user):
        make_user(email="frank@example.com")
        response = client.post("/auth/login", json={"email": "frank@example.com", "password": "whatever"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "invalid_credentials"

    @pytest.mark.parametrize("body", [{}, {"title": None}])
    def test_empty_company_patch(self, client, make_user, make_company, auth_headers, body):
        owner = make_user()
        company = make_company(owner=owner)
        response = client.patch(f"/companies/{company.id}", json=body, headers=auth_headers(owner))
        assert response.status_code == 204

    def test_categories(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())
        response = client.post("/categories", json={"title": "Garden"}, headers=headers)
        assert response.status_code == 201

        assert [c["title"] for c in client.get("/categories").json()] == ["Garden"]


@pytest.mark.integration
def test_unknown_route(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json()["error_code"] == "endpoint_not_found"
