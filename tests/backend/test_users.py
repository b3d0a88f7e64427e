from devconnector.models import User


def test_register_returns_token_and_stores_hash(test_app_client):
    client, session_factory = test_app_client

    resp = client.post(
        "/api/v1/users",
        json={"name": "User A", "email": "A@x.com", "password": "secret1"},
    )

    assert resp.status_code == 200
    assert resp.json()["token"]

    session = session_factory()
    user = session.query(User).filter(User.email == "a@x.com").one()
    assert user.password != "secret1"
    assert user.avatar.startswith("//www.gravatar.com/avatar/")
    session.close()


def test_registered_token_authenticates(test_app_client):
    client, _ = test_app_client
    token = client.post(
        "/api/v1/users",
        json={"name": "User A", "email": "a@x.com", "password": "secret1"},
    ).json()["token"]

    resp = client.get("/api/v1/auth", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["name"] == "User A"


def test_duplicate_email_is_rejected(test_app_client, make_user):
    client, _ = test_app_client
    make_user("a@x.com")

    resp = client.post(
        "/api/v1/users",
        json={"name": "Again", "email": "a@x.com", "password": "secret1"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"errors": [{"msg": "User already exists"}]}


def test_registration_validation(test_app_client):
    client, session_factory = test_app_client

    resp = client.post("/api/v1/users", json={"name": " ", "email": "bad", "password": "123"})

    assert resp.status_code == 400
    errors = {e["param"]: e for e in resp.json()["errors"]}
    assert errors["name"]["msg"] == "Name is required"
    assert errors["email"]["msg"] == "Please include a valid email"
    assert errors["password"]["msg"] == "Please enter a password with 6 or more characters"
    assert {e["location"] for e in errors.values()} == {"body"}

    session = session_factory()
    assert session.query(User).count() == 0
    session.close()


def test_password_longer_than_bcrypt_limit(test_app_client):
    client, _ = test_app_client

    resp = client.post(
        "/api/v1/users",
        json={"name": "User A", "email": "a@x.com", "password": "p" * 73},
    )

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["param"] == "password"
