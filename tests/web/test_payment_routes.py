import uuid

import pytest


async def _create(client, user_id=None, items=("sku-1", "sku-2")):
    user_id = user_id or uuid.uuid4()
    resp = await client.post("/payments", json={"UserId": str(user_id), "Items": list(items)})
    return user_id, resp


@pytest.mark.asyncio
async def test_payment_lifecycle_end_to_end(client):
    user_id, resp = await _create(client)

    assert resp.status_code == 201
    body = resp.json()
    payment_id = body["id"]
    assert body == {"id": payment_id, "status": "pending"}
    assert resp.headers["Location"] == f"/payments/{payment_id}"

    resp = await client.get(f"/payments/{payment_id}")
    assert resp.status_code == 200
    payment = resp.json()
    assert payment["id"] == payment_id
    assert payment["user_id"] == str(user_id)
    assert payment["status"] == "pending"
    assert payment["created_at"]

    resp = await client.put(f"/payments/{payment_id}/approve")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await client.get(f"/payments/{payment_id}")
    assert resp.json()["status"] == "approved"

    resp = await client.get(f"/payments/{payment_id}/events")
    assert resp.status_code == 200
    events = resp.json()
    assert len(events) == 1
    assert events[0]["type"] == "PaymentRequested"
    assert set(events[0]) == {"id", "type", "data", "created_at"}


@pytest.mark.asyncio
async def test_create_accepts_snake_case_body(client):
    resp = await client.post("/payments", json={"user_id": str(uuid.uuid4()), "items": []})
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_create_with_invalid_user_id_is_rejected(client, publisher):
    resp = await client.post("/payments", json={"UserId": "not-a-uuid", "Items": []})

    assert resp.status_code == 422
    assert resp.json()["error"]["type"] == "ValidationError"
    assert publisher.published == []


@pytest.mark.asyncio
async def test_get_unknown_payment_returns_404(client):
    resp = await client.get(f"/payments/{uuid.uuid4()}")

    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == 20100
    assert body["data"] is None
    assert body["error"]["type"] == "PaymentNotFound"
    assert body["error"]["request_id"] == resp.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_get_with_malformed_id_returns_422(client):
    resp = await client.get("/payments/not-a-uuid")
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["approve", "reject", "cancel"])
async def test_transition_unknown_payment_returns_404(client, action):
    resp = await client.put(f"/payments/{uuid.uuid4()}/{action}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_canceled_payment_can_be_approved(client):
    _, resp = await _create(client)
    payment_id = resp.json()["id"]

    assert (await client.put(f"/payments/{payment_id}/cancel")).status_code == 204
    assert (await client.put(f"/payments/{payment_id}/approve")).status_code == 204
    assert (await client.get(f"/payments/{payment_id}")).json()["status"] == "approved"


@pytest.mark.asyncio
async def test_list_payments(client):
    assert (await client.get("/payments")).json() == []

    _, first = await _create(client)
    _, second = await _create(client)

    resp = await client.get("/payments")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [second.json()["id"], first.json()["id"]]


@pytest.mark.asyncio
async def test_full_listing_is_not_treated_as_payment_id(client):
    _, created = await _create(client)

    resp = await client.get("/payments/full")

    assert resp.status_code == 200
    (row,) = resp.json()
    assert row["id"] == created.json()["id"]
    assert row["user_name"] is None
    assert row["email"] is None


@pytest.mark.asyncio
async def test_delete_payment_keeps_events(client):
    _, created = await _create(client)
    payment_id = created.json()["id"]

    resp = await client.delete(f"/payments/{payment_id}")
    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}

    assert (await client.get(f"/payments/{payment_id}")).status_code == 404
    assert (await client.delete(f"/payments/{payment_id}")).status_code == 404

    events = (await client.get(f"/payments/{payment_id}/events")).json()
    assert [e["type"] for e in events] == ["PaymentRequested"]


@pytest.mark.asyncio
async def test_publish_failure_still_persists_payment(client, use_publisher, broker_down):
    use_publisher(broker_down)

    _, resp = await _create(client)

    assert resp.status_code == 503
    assert resp.json()["error"]["type"] == "BrokerUnavailable"

    (payment,) = (await client.get("/payments")).json()
    assert (await client.get(f"/payments/{payment['id']}")).status_code == 200
    events = (await client.get(f"/payments/{payment['id']}/events")).json()
    assert len(events) == 1


@pytest.mark.asyncio
async def test_events_for_other_payment_are_not_returned(client):
    _, a = await _create(client, items=["a"])
    _, b = await _create(client, items=["b"])

    events_b = (await client.get(f"/payments/{b.json()['id']}/events")).json()

    assert len(events_b) == 1
    assert a.json()["id"] not in events_b[0]["data"]
