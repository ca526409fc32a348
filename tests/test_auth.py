from storefront.auth_local import create_access_token, decode_access_token

def test_token_round_trip(settings):
    token = create_access_token("abc123", settings)

    assert decode_access_token(token, settings)["sub"] == "abc123"

def test_expired_token_is_rejected(settings):
    token = create_access_token("abc123", settings, expires_minutes=-1)

    assert decode_access_token(token, settings) is None

def test_cookie_token_accepted(client, customer, settings):
    token = create_access_token(customer.id, settings)

    resp = client.get("/api/orders", headers={"Cookie": f"token={token}"})

    assert resp.status_code == 200

def test_garbage_token(client):
    resp = client.get("/api/orders", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Token is not valid."

def test_token_for_deleted_user(client, settings):
    token = create_access_token("f" * 32, settings)

    resp = client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})

    assert resp.json()["message"] == "Token is not valid. User not found."

def test_deactivated_user(client, customer, customer_headers, db):
    customer.is_active = False
    db.commit()

    resp = client.get("/api/orders", headers=customer_headers)

    assert resp.status_code == 401
    assert resp.json()["message"] == "User account is deactivated."
