from app.models.user import User, UserStatus
from app.utils.security import create_access_token

REGISTRATION = {
    "name": "Ravi Kumar",
    "email": "ravi@example.com",
    "gstNo": "27ABCDE1234F1Z5",
    "shopName": "Ravi General Store",
    "address": "4 Station Road, Nagpur",
    "phone": "9876543210",
    "password": "secret123",
}


def test_register_creates_pending_seller(client, db):
    response = client.post("/auth/register", json=REGISTRATION)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Registration successful. Please upload KYC documents."

    user = db.query(User).filter(User.id == body["id"]).one()
    assert user.status == UserStatus.PENDING
    assert user.gst_no == "27ABCDE1234F1Z5"
    assert user.shop_name == "Ravi General Store"
    assert user.password_hash != "secret123"


def test_register_duplicate_email(client):
    client.post("/auth/register", json=REGISTRATION)
    response = client.post("/auth/register", json=REGISTRATION)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Email already registered"
    assert body["error"]["code"] == "CONFLICT"


def test_register_requires_fields(client):
    payload = {key: value for key, value in REGISTRATION.items() if key != "shopName"}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_returns_user_and_tokens(client):
    client.post("/auth/register", json=REGISTRATION)

    response = client.post("/auth/login", json={"email": "ravi@example.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "ravi@example.com"
    assert body["user"]["status"] == "pending"
    assert body["user"]["role"] == "seller"
    assert body["token"] and body["refreshToken"]


def test_login_wrong_password(client):
    client.post("/auth/register", json=REGISTRATION)
    response = client.post("/auth/login", json={"email": "ravi@example.com", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_passwordless_account_logs_in_by_email(client):
    payload = {key: value for key, value in REGISTRATION.items() if key != "password"}
    client.post("/auth/register", json=payload)

    response = client.post("/auth/login", json={"email": "ravi@example.com"})
    assert response.status_code == 200


def test_me_and_refresh(client):
    client.post("/auth/register", json=REGISTRATION)
    login = client.post("/auth/login", json={"email": "ravi@example.com", "password": "secret123"}).json()

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {login['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == login["user"]["id"]

    refreshed = client.post("/auth/refresh", json={"refreshToken": login["refreshToken"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["token"]


def test_access_token_cannot_refresh(client, seller, seller_headers):
    access = seller_headers["Authorization"].split(" ", 1)[1]
    response = client.post("/auth/refresh", json={"refreshToken": access})
    assert response.status_code == 401


def test_protected_routes_need_a_valid_token(client):
    assert client.get("/auth/me").status_code == 401
    bad = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401

    orphan = create_access_token({"sub": "deleted-user"})
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {orphan}"}).status_code == 401


def test_get_user_own_record_or_admin(client, seller, make_user, seller_headers, admin_headers):
    other = make_user()

    assert client.get(f"/auth/user/{seller.id}", headers=seller_headers).status_code == 200
    assert client.get(f"/auth/user/{other.id}", headers=seller_headers).status_code == 403
    response = client.get(f"/auth/user/{other.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["email"] == other.email
    assert "password_hash" not in response.json()


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "healthy"
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Process-Time" in response.headers
