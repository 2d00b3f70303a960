from app.models.order import Order
from app.models.product import Product
from app.models.user import UserStatus


def _stock(db, product_id):
    db.expire_all()
    return db.query(Product).filter(Product.id == product_id).one().stock


def test_place_order(client, db, seller, seller_headers, make_product):
    rice = make_product(name="Rice", price="100.00", discount="10", stock=5)
    salt = make_product(name="Salt", price="50.00", stock=5)

    response = client.post("/orders", headers=seller_headers, json={
        "userId": seller.id,
        "items": [{"productId": rice.id, "quantity": 2}, {"productId": salt.id, "quantity": 1}],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["totalAmount"] == 230.0
    assert body["message"] == "Order created successfully"
    assert _stock(db, rice.id) == 3

    detail = client.get(f"/orders/{body['id']}", headers=seller_headers).json()
    assert detail["status"] == "pending"
    assert {(item["product_name"], item["price"]) for item in detail["items"]} == {("Rice", 90.0), ("Salt", 50.0)}


def test_user_defaults_to_caller(client, seller, seller_headers, make_product):
    product = make_product(stock=2)
    response = client.post("/orders", headers=seller_headers, json={"items": [{"productId": product.id, "quantity": 1}]})
    assert response.status_code == 201

    orders = client.get("/orders", headers=seller_headers).json()
    assert [o["user_id"] for o in orders] == [seller.id]


def test_insufficient_stock_is_a_400(client, db, seller_headers, make_product):
    product = make_product(name="Ghee", stock=1)

    response = client.post("/orders", headers=seller_headers, json={"items": [{"productId": product.id, "quantity": 2}]})

    assert response.status_code == 400
    assert response.json()["message"] == "Insufficient stock for Ghee"
    assert response.json()["error"]["code"] == "INSUFFICIENT_STOCK"
    assert _stock(db, product.id) == 1
    assert db.query(Order).count() == 0


def test_unknown_product_is_a_400(client, seller_headers):
    response = client.post("/orders", headers=seller_headers, json={"items": [{"productId": "nope", "quantity": 1}]})
    assert response.status_code == 400
    assert response.json()["message"] == "Product nope not found"


def test_zero_quantity_is_a_400(client, seller_headers, make_product):
    product = make_product()
    response = client.post("/orders", headers=seller_headers, json={"items": [{"productId": product.id, "quantity": 0}]})
    assert response.status_code == 400


def test_cannot_order_for_someone_else(client, seller_headers, make_user, make_product):
    other = make_user()
    product = make_product()
    response = client.post("/orders", headers=seller_headers, json={
        "userId": other.id, "items": [{"productId": product.id, "quantity": 1}]
    })
    assert response.status_code == 403


def test_unverified_seller_cannot_order(client, make_user, auth_headers, make_product):
    pending = make_user(status=UserStatus.PENDING)
    product = make_product()
    response = client.post("/orders", headers=auth_headers(pending), json={
        "items": [{"productId": product.id, "quantity": 1}]
    })
    assert response.status_code == 403


def test_orders_require_login(client):
    assert client.post("/orders", json={"items": []}).status_code == 401


def test_status_workflow(client, db, seller_headers, admin_headers, make_product):
    product = make_product(stock=5)
    order_id = client.post("/orders", headers=seller_headers, json={
        "items": [{"productId": product.id, "quantity": 2}]
    }).json()["id"]

    shipped = client.put(f"/orders/{order_id}/status", headers=admin_headers, json={"status": "shipped", "notes": "AWB 123"})
    assert shipped.status_code == 200
    assert shipped.json()["message"] == "Order status updated to shipped"

    back = client.put(f"/orders/{order_id}/status", headers=admin_headers, json={"status": "pending"})
    assert back.status_code == 409
    assert back.json()["error"]["code"] == "INVALID_TRANSITION"

    client.put(f"/orders/{order_id}/status", headers=admin_headers, json={"status": "delivered"})
    after_terminal = client.put(f"/orders/{order_id}/status", headers=admin_headers, json={"status": "cancelled"})
    assert after_terminal.status_code == 409

    history = client.get(f"/orders/{order_id}/history", headers=seller_headers).json()
    assert [(h["from_status"], h["status"]) for h in history] == [
        (None, "pending"), ("pending", "shipped"), ("shipped", "delivered")
    ]
    assert history[1]["notes"] == "AWB 123"
    assert _stock(db, product.id) == 3


def test_only_admins_change_status(client, seller_headers, make_product):
    product = make_product()
    order_id = client.post("/orders", headers=seller_headers, json={
        "items": [{"productId": product.id, "quantity": 1}]
    }).json()["id"]
    response = client.put(f"/orders/{order_id}/status", headers=seller_headers, json={"status": "shipped"})
    assert response.status_code == 403


def test_status_update_errors(client, admin_headers, seller_headers, make_product):
    assert client.put("/orders/missing/status", headers=admin_headers, json={"status": "shipped"}).status_code == 404

    product = make_product()
    order_id = client.post("/orders", headers=seller_headers, json={
        "items": [{"productId": product.id, "quantity": 1}]
    }).json()["id"]
    response = client.put(f"/orders/{order_id}/status", headers=admin_headers, json={"status": "lost"})
    assert response.status_code == 400


def test_order_visibility(client, seller_headers, admin_headers, make_user, auth_headers, make_product):
    product = make_product(stock=10)
    mine = client.post("/orders", headers=seller_headers, json={
        "items": [{"productId": product.id, "quantity": 1}]
    }).json()["id"]
    other = make_user()
    other_headers = auth_headers(other)
    theirs = client.post("/orders", headers=other_headers, json={
        "items": [{"productId": product.id, "quantity": 1}]
    }).json()["id"]

    assert client.get(f"/orders/{theirs}", headers=seller_headers).status_code == 403
    assert [o["id"] for o in client.get("/orders", headers=seller_headers).json()] == [mine]
    assert client.get(f"/orders?userId={other.id}", headers=seller_headers).status_code == 403

    everything = client.get("/orders", headers=admin_headers).json()
    assert {o["id"] for o in everything} == {mine, theirs}
    filtered = client.get(f"/orders?userId={other.id}&status=pending", headers=admin_headers).json()
    assert [o["id"] for o in filtered] == [theirs]
    assert filtered[0]["shop_name"] == "Test Shop"
