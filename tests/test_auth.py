from datetime import timedelta

from hotel_ops.auth import (
    Capability,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
    verify_pin,
)
from hotel_ops.models.user import UserRole


def test_password_hash_roundtrip():
    hashed = get_password_hash("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_rejects_garbage_hash():
    assert verify_password("s3cret", "not-a-bcrypt-hash") is False


def test_token_carries_identity(staff_user):
    claims = decode_access_token(create_access_token(staff_user))
    assert claims.id == staff_user.id
    assert claims.username == "awed"
    assert claims.role == UserRole.STAFF
    assert not claims.is_admin


def test_verify_pin():
    assert verify_pin("47123")
    assert not verify_pin("00000")
    assert not verify_pin(None)
    assert not verify_pin("")


def test_capabilities_are_ordered():
    assert Capability.ANONYMOUS < Capability.PIN_VIEWER < Capability.STAFF
    assert not hasattr(Capability, "ADMIN")


def test_login_success(client, staff_user):
    resp = client.post("/api/auth/login", json={"username": "awed", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"] == {"id": staff_user.id, "username": "awed", "role": "staff"}
    assert decode_access_token(body["token"]).id == staff_user.id


def test_login_bad_password(client, staff_user):
    resp = client.post("/api/auth/login", json={"username": "awed", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


def test_login_unknown_user(client):
    resp = client.post("/api/auth/login", json={"username": "ghost", "password": "x"})
    assert resp.status_code == 401


def test_login_missing_field_is_400(client):
    resp = client.post("/api/auth/login", json={"username": "awed"})
    assert resp.status_code == 400
    assert "password" in resp.json()["message"]


def test_missing_token_is_401(client):
    resp = client.post("/api/rooms", json={"number": "101", "type": "Standard"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "No token provided"


def test_bearer_without_token_is_401(client):
    resp = client.post(
        "/api/rooms",
        json={"number": "101", "type": "Standard"},
        headers={"Authorization": "Bearer"},
    )
    assert resp.status_code == 401


def test_tampered_token_is_403(client, staff_headers):
    headers = {"Authorization": staff_headers["Authorization"] + "x"}
    resp = client.post("/api/rooms", json={"number": "101", "type": "Standard"}, headers=headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Invalid token"


def test_expired_token_is_403(client, staff_user):
    token = create_access_token(staff_user, expires_delta=timedelta(seconds=-5))
    resp = client.post(
        "/api/rooms",
        json={"number": "101", "type": "Standard"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 403


def test_admin_route_rejects_staff(client, staff_headers):
    for method, path in [
        ("get", "/api/users"),
        ("post", "/api/users"),
        ("put", "/api/users/1/password"),
        ("put", "/api/users/1/role"),
        ("delete", "/api/users/1"),
        ("get", "/api/logs"),
    ]:
        resp = client.request(method.upper(), path, headers=staff_headers, json={})
        assert resp.status_code == 403, (method, path)
        assert resp.json()["message"] == "Admin access required"


def test_admin_route_with_deleted_user_is_404(client, db, admin_user, admin_headers):
    db.delete(admin_user)
    db.commit()
    resp = client.get("/api/users", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


def test_verify_pin_endpoint(client):
    assert client.post("/api/verify-pin", json={"pin": "47123"}).json() == {"message": "PIN verified"}
    resp = client.post("/api/verify-pin", json={"pin": "1111"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid PIN"}


def test_pin_endpoint_trims_whitespace(client):
    assert client.post("/api/auth/pin", json={"pin": " 47123 "}).json() == {"success": True}
    resp = client.post("/api/auth/pin", json={"pin": "47124"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_pin_grants_read_access(client, pin_headers, room):
    assert client.get("/api/rooms", headers=pin_headers).status_code == 200
    assert client.get(f"/api/rooms/{room['id']}", headers=pin_headers).status_code == 200
    assert client.get(f"/api/rooms/{room['id']}/titles", headers=pin_headers).status_code == 200


def test_wrong_pin_is_401(client, room):
    headers = {"X-View-Pin": "99999"}
    resp = client.get("/api/rooms", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid PIN"
    assert client.get(f"/api/rooms/{room['id']}/titles", headers=headers).status_code == 401


def test_read_without_credentials_is_401(client):
    resp = client.get("/api/rooms")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Authentication required"


def test_pin_cannot_write(client, pin_headers):
    resp = client.post("/api/rooms", json={"number": "101", "type": "Standard"}, headers=pin_headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "No token provided"


def test_pin_cannot_read_issue_routes(client, pin_headers, room, title):
    resp = client.get(f"/api/rooms/{room['id']}/titles/{title['id']}/issues", headers=pin_headers)
    assert resp.status_code == 401


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"


def test_pin_cannot_write_any_resource(client, pin_headers, room, title):
    for method, path in [
        ("put", f"/api/rooms/{room['id']}"),
        ("delete", f"/api/rooms/{room['id']}"),
        ("post", f"/api/rooms/{room['id']}/titles"),
        ("delete", f"/api/rooms/{room['id']}/titles/{title['id']}"),
        ("post", f"/api/rooms/{room['id']}/titles/{title['id']}/issues"),
    ]:
        resp = client.request(method.upper(), path, headers=pin_headers, json={})
        assert resp.status_code == 401, (method, path)
        assert resp.json()["message"] == "No token provided"


def test_token_wins_over_pin_on_write(client, staff_headers):
    headers = {**staff_headers, "X-View-Pin": "99999"}
    resp = client.post("/api/rooms", json={"number": "102", "type": "Standard"}, headers=headers)
    assert resp.status_code == 201
