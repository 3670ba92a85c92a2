"""
Name: Audit Endpoint Tests

Responsibilities:
  - Ensure GET /api/audit is admin-only
  - Validate strict pagination parameters (400 on out-of-range)
  - Validate entry shape and newest-first ordering
"""

import pytest

pytestmark = pytest.mark.unit

INVALID_PAGINATION = (
    "Invalid pagination parameters. Page must be >= 1, limit must be 1-100"
)


def _seed_history(client, admin_headers) -> str:
    res = client.post(
        "/api/products", json={"name": "Lamp", "price": 20}, headers=admin_headers
    )
    product_id = res.json()["id"]
    client.put(
        f"/api/products/{product_id}", json={"name": "Desk Lamp"}, headers=admin_headers
    )
    client.delete(f"/api/products/{product_id}", headers=admin_headers)
    return product_id


def test_audit_requires_admin(client, user_headers):
    assert client.get("/api/audit").status_code == 401
    assert client.get("/api/audit", headers=user_headers).status_code == 403


def test_entries_are_newest_first_with_snapshots(client, admin_headers):
    product_id = _seed_history(client, admin_headers)

    res = client.get("/api/audit", headers=admin_headers)

    assert res.status_code == 200
    data = res.json()["data"]
    assert [e["action"] for e in data] == ["delete", "update", "create"]
    assert all(e["user_email"] == "admin@example.com" for e in data)
    assert all(e["product_id"] == product_id for e in data)
    assert data[1]["product_name"] == "Desk Lamp"
    assert data[1]["details"] == "Product updated: name -> Desk Lamp"
    assert data[2]["product_name"] == "Lamp"
    ids = [e["id"] for e in data]
    assert ids == sorted(ids, reverse=True)


def test_default_limit_and_pagination_metadata(client, admin_headers):
    _seed_history(client, admin_headers)

    res = client.get("/api/audit", params={"page": 2, "limit": 2}, headers=admin_headers)
    default = client.get("/api/audit", headers=admin_headers)

    assert [e["action"] for e in res.json()["data"]] == ["create"]
    assert res.json()["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
    }
    assert default.json()["pagination"]["limit"] == 20


@pytest.mark.parametrize(
    "params", [{"page": 0}, {"page": -1}, {"limit": 0}, {"limit": 101}]
)
def test_out_of_range_pagination_is_rejected(client, admin_headers, params):
    res = client.get("/api/audit", params=params, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert res.json()["detail"] == INVALID_PAGINATION


def test_empty_trail(client, admin_headers):
    res = client.get("/api/audit", headers=admin_headers)

    assert res.json() == {
        "data": [],
        "pagination": {"page": 1, "limit": 20, "total": 0, "totalPages": 0},
    }
