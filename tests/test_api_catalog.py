from app.models.product import Product

PNG = b"\x89PNG\r\n\x1a\n fake image"


def test_category_crud(client, admin_headers):
    created = client.post("/categories", headers=admin_headers, json={"name": "Spices", "imageUrl": "https://cdn.test/spices.png"})
    assert created.status_code == 201
    category_id = created.json()["id"]
    assert created.json()["image_url"] == "https://cdn.test/spices.png"

    client.post("/categories", headers=admin_headers, json={"name": "Beverages"})
    names = [c["name"] for c in client.get("/categories").json()]
    assert names == ["Beverages", "Spices"]

    updated = client.put(f"/categories/{category_id}", headers=admin_headers, json={"name": "Masala"})
    assert updated.json()["name"] == "Masala"
    assert updated.json()["image_url"] is None

    assert client.delete(f"/categories/{category_id}", headers=admin_headers).json()["success"] is True
    assert client.get(f"/categories/{category_id}").status_code == 404


def test_category_writes_need_admin(client, seller_headers):
    assert client.post("/categories", json={"name": "Toys"}).status_code == 401
    assert client.post("/categories", headers=seller_headers, json={"name": "Toys"}).status_code == 403


def test_deleting_category_keeps_products(client, db, admin_headers, category, make_product):
    product = make_product()
    client.delete(f"/categories/{category.id}", headers=admin_headers)

    db.expire_all()
    assert db.query(Product).filter(Product.id == product.id).one().category_id is None


def test_product_crud(client, admin_headers, seller, category):
    payload = {
        "categoryId": category.id,
        "name": "Toor Dal 1kg",
        "description": "Unpolished",
        "price": 145.5,
        "unit": "kg",
        "stock": 40,
        "discount": 5,
        "sellerId": seller.id,
    }
    created = client.post("/products", headers=admin_headers, json=payload)
    assert created.status_code == 201
    product = created.json()
    assert product["category_name"] == "Groceries"
    assert product["price"] == 145.5
    assert product["seller_id"] == seller.id

    fetched = client.get(f"/products/{product['id']}").json()
    assert fetched["name"] == "Toor Dal 1kg"

    updated = client.put(f"/products/{product['id']}", headers=admin_headers, json={
        "categoryId": category.id, "name": "Toor Dal 2kg", "price": 280, "stock": 12
    })
    assert updated.status_code == 200
    assert updated.json()["name"] == "Toor Dal 2kg"
    assert updated.json()["discount"] == 0
    assert updated.json()["description"] is None
    assert updated.json()["seller_id"] == seller.id

    assert client.delete(f"/products/{product['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/products/{product['id']}").status_code == 404


def test_product_filters(client, db, seller, make_user, make_product, category):
    other = make_user()
    mine = make_product(name="Jaggery", seller_id=seller.id)
    make_product(name="Tea", seller_id=other.id)
    uncategorised = make_product(name="Soap", category_id=None, seller_id=seller.id)

    by_seller = client.get(f"/products?sellerId={seller.id}").json()
    assert {p["id"] for p in by_seller} == {mine.id, uncategorised.id}

    both = client.get(f"/products?sellerId={seller.id}&categoryId={category.id}").json()
    assert [p["id"] for p in both] == [mine.id]
    assert both[0]["category_name"] == "Groceries"

    assert len(client.get("/products").json()) == 3


def test_product_validation(client, admin_headers, category):
    negative = client.post("/products", headers=admin_headers, json={"name": "Bad", "price": -1, "categoryId": category.id})
    assert negative.status_code == 422

    too_much = client.post("/products", headers=admin_headers, json={"name": "Bad", "price": 10, "discount": 150})
    assert too_much.status_code == 422

    dangling = client.post("/products", headers=admin_headers, json={"name": "Orphan", "price": 10, "categoryId": "missing"})
    assert dangling.status_code == 400


def test_product_writes_need_admin(client, seller_headers):
    response = client.post("/products", headers=seller_headers, json={"name": "Sneaky", "price": 1})
    assert response.status_code == 403


def test_upload_product_image(client, admin_headers, blob_store):
    response = client.post("/products/upload-image", headers=admin_headers, files={"file": ("dal.png", PNG, "image/png")})

    assert response.status_code == 201
    url = response.json()["imageUrl"]
    assert url.startswith("https://cdn.test/uploads/products/")
    assert url.endswith("-dal.png")
    stored = blob_store.root.joinpath(*url.split("/uploads/", 1)[1].split("/"))
    assert stored.read_bytes() == PNG


def test_upload_product_image_rejects_other_files(client, admin_headers):
    response = client.post("/products/upload-image", headers=admin_headers, files={"file": ("notes.txt", b"hi", "text/plain")})
    assert response.status_code == 400
