"""Order Routes — HTTP status codes and error envelopes for the kiosk flow."""

import base64

from canteen.core.domain_types import Tier

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
SIGNATURE = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()


async def test_submit_returns_ticket(client, add_worker):
    await add_worker("12345678K", name="ANA", company="ACME")
    res = await client.post("/api/v1/orders", json={
        "identity": "12.345.678-k", "fulfillment_mode": "dine-in",
    })
    assert res.status_code == 201
    body = res.json()
    assert len(body["id"]) == 8
    assert body["worker_name"] == "ANA"
    assert body["company"] == "ACME"
    assert body["fulfillment_mode"] == "DINE_IN"
    assert body["meal_slot"] == "LUNCH"
    assert body["quantity"] == 1
    assert body["date"] == "2026-07-15"
    assert body["is_premium"] is False


async def test_legacy_tokens_accepted(client, add_worker):
    await add_worker("1", tier=Tier.PLUS)
    res = await client.post("/api/v1/orders", json={
        "identity": "1", "fulfillment_mode": "llevar", "meal_slot": "cena",
        "quantity": 2, "guest_names": "Luis, Marta",
    })
    assert res.status_code == 201
    assert res.json()["fulfillment_mode"] == "TAKEAWAY"
    assert res.json()["meal_slot"] == "DINNER"


async def test_unparseable_quantity_falls_back_to_one(client, add_worker):
    await add_worker("W1")
    res = await client.post("/api/v1/orders", json={
        "identity": "W1", "fulfillment_mode": "dine-in", "quantity": "abc",
    })
    assert res.status_code == 201
    assert res.json()["quantity"] == 1


async def test_second_order_is_quota_exceeded(client, add_worker):
    await add_worker("1")
    payload = {"identity": "1", "fulfillment_mode": "takeaway"}
    await client.post("/api/v1/orders", json=payload)
    res = await client.post("/api/v1/orders", json=payload)
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "QUOTA_EXCEEDED"
    assert error["details"] == {"max_daily": 1, "already_ordered": 1}


async def test_unknown_worker_is_404(client):
    res = await client.post("/api/v1/orders", json={
        "identity": "99999999", "fulfillment_mode": "dine-in",
    })
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "WORKER_NOT_FOUND"


async def test_bad_fulfillment_mode_is_validation_error(client):
    res = await client.post("/api/v1/orders", json={
        "identity": "1", "fulfillment_mode": "drone",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_off_grid_pickup_is_invalid_parameters(client, add_worker):
    await add_worker("1")
    res = await client.post("/api/v1/orders", json={
        "identity": "1", "fulfillment_mode": "dine-in", "pickup_time": "12:10",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PARAMETERS"


async def test_get_ticket_with_logo(client, add_worker, add_company):
    await add_company("ACME", logo_path="https://cdn.example.com/acme.png")
    await add_worker("1", company="ACME")
    created = await client.post("/api/v1/orders", json={
        "identity": "1", "fulfillment_mode": "dine-in", "pickup_time": "12:30",
    })
    ticket_id = created.json()["id"]
    res = await client.get(f"/api/v1/orders/{ticket_id.lower()}")
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == ticket_id
    assert body["pickup_time"] == "12:30"
    assert body["company_logo"] == "https://cdn.example.com/acme.png"
    assert "signature" not in body


async def test_get_missing_ticket(client):
    res = await client.get("/api/v1/orders/ZZZZZZZZ")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_signature_served_as_png(client, add_worker):
    await add_worker("1")
    created = await client.post("/api/v1/orders", json={
        "identity": "1", "fulfillment_mode": "dine-in", "signature": SIGNATURE,
    })
    res = await client.get(f"/api/v1/orders/{created.json()['id']}/signature")
    assert res.status_code == 200
    assert res.headers["content-type"] == "image/png"
    assert res.content == PNG_BYTES


async def test_missing_signature_is_404(client, add_order):
    order = await add_order("1", "2026-07-15")
    res = await client.get(f"/api/v1/orders/{order.id}/signature")
    assert res.status_code == 404


async def test_patch_requires_admin(client, add_order):
    order = await add_order("1", "2026-07-15")
    res = await client.patch(f"/api/v1/orders/{order.id}", json={"printed": True})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
    ticket = await client.get(f"/api/v1/orders/{order.id}")
    assert ticket.json()["printed"] is False


async def test_patch_printed_flag(client, admin_headers, add_order):
    order = await add_order("1", "2026-07-15")
    res = await client.patch(
        f"/api/v1/orders/{order.id}", json={"printed": True}, headers=admin_headers,
    )
    assert res.status_code == 204
    ticket = await client.get(f"/api/v1/orders/{order.id}")
    assert ticket.json()["printed"] is True


async def test_delete_requires_admin(client, add_order):
    order = await add_order("1", "2026-07-15")
    res = await client.delete(f"/api/v1/orders/{order.id}")
    assert res.status_code == 401
    assert (await client.get(f"/api/v1/orders/{order.id}")).status_code == 200


async def test_delete_order(client, admin_headers, add_order):
    order = await add_order("1", "2026-07-15")
    res = await client.delete(f"/api/v1/orders/{order.id}", headers=admin_headers)
    assert res.status_code == 204
    assert (await client.get(f"/api/v1/orders/{order.id}")).status_code == 404
