"""End-to-end amendment lifecycle through the HTTP surface, on in-memory stores."""

import pytest
from httpx import AsyncClient

from freight_amendments.domain.models.amendment import AmendmentStatus


async def _create(client, headers, shipment_id="S1", reason="port delay", extra_headers=None):
    return await client.post(
        "/client/amendments",
        json={"shipment_id": shipment_id, "reason": reason},
        headers={**headers, **(extra_headers or {})},
    )


async def _decide(client, headers, amendment_id, action):
    return await client.put(f"/admin/amendments/{amendment_id}", json={"action": action}, headers=headers)


async def _respond(client, headers, amendment_id, body):
    return await client.post(f"/vendor/amendments/{amendment_id}/respond", json=body, headers=headers)


@pytest.mark.asyncio
async def test_full_lifecycle(client: AsyncClient, client_headers, admin_headers, vendor_headers):
    r = await _create(client, client_headers)
    assert r.status_code == 201
    created = r.json()
    assert created["status"] == "requested"
    amendment_id = created["id"]

    queue = await client.get("/admin/amendments", headers=admin_headers)
    assert [a["id"] for a in queue.json()["amendments"]] == [amendment_id]

    r = await _decide(client, admin_headers, amendment_id, "approve")
    assert r.status_code == 200
    assert r.json()["status"] == "admin_review"

    r = await _decide(client, admin_headers, amendment_id, "push")
    assert r.json()["status"] == "client_review"

    pending = await client.get("/client/amendments/pending", headers=client_headers)
    assert [a["id"] for a in pending.json()["amendments"]] == [amendment_id]

    r = await _respond(
        client,
        vendor_headers,
        amendment_id,
        {"response": "approve", "extra_cost": 500, "delay_days": 3, "reason": "extra trucking"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "accepted"
    assert body["extra_cost"] == 500.0
    assert body["delay_days"] == 3
    assert body["vendor_reply_at"] is not None

    detail = await client.get(f"/amendments/{amendment_id}", headers=client_headers)
    assert detail.status_code == 200
    assert detail.json()["status"] == "accepted"


@pytest.mark.asyncio
async def test_create_on_foreign_shipment_returns_404(client: AsyncClient, client_headers, repository):
    r = await _create(client, client_headers, shipment_id="S2")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"
    assert repository.rows == {}


@pytest.mark.asyncio
async def test_create_with_blank_reason_returns_422(client: AsyncClient, client_headers):
    r = await _create(client, client_headers, reason="  ")
    assert r.status_code == 422
    assert r.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_create_with_malformed_body_returns_422(client: AsyncClient, client_headers):
    r = await client.post("/client/amendments", json={"reason": "x"}, headers=client_headers)
    assert r.status_code == 422
    assert r.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_create_idempotency_key_replays(client: AsyncClient, client_headers, repository):
    key = {"X-Idempotency-Key": "form-42"}
    first = await _create(client, client_headers, extra_headers=key)
    second = await _create(client, client_headers, extra_headers=key)
    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert len(repository.rows) == 1


@pytest.mark.asyncio
async def test_vendor_cannot_create(client: AsyncClient, vendor_headers):
    r = await _create(client, vendor_headers)
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"


@pytest.mark.asyncio
async def test_push_from_requested_returns_409(client: AsyncClient, client_headers, admin_headers):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    r = await _decide(client, admin_headers, amendment_id, "push")
    assert r.status_code == 409
    assert r.json()["error"] == "invalid_transition"


@pytest.mark.asyncio
async def test_unknown_admin_action_returns_422(client: AsyncClient, client_headers, admin_headers):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    r = await _decide(client, admin_headers, amendment_id, "accept")
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_decide_missing_amendment_returns_404(client: AsyncClient, admin_headers):
    r = await _decide(client, admin_headers, "missing", "approve")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_reject_then_vendor_respond_returns_409(
    client: AsyncClient, client_headers, admin_headers, vendor_headers
):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    r = await _decide(client, admin_headers, amendment_id, "reject")
    assert r.json()["status"] == "rejected"

    r = await _respond(client, vendor_headers, amendment_id, {"response": "approve", "reason": "ok"})
    assert r.status_code == 409
    assert r.json()["error"] == "invalid_transition"


@pytest.mark.asyncio
async def test_non_winning_vendor_returns_403(
    client: AsyncClient, client_headers, admin_headers, other_vendor_headers
):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    await _decide(client, admin_headers, amendment_id, "approve")
    await _decide(client, admin_headers, amendment_id, "push")

    r = await _respond(client, other_vendor_headers, amendment_id, {"response": "reject", "reason": "no"})
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"


@pytest.mark.asyncio
async def test_vendor_view_scoped_to_won_shipments(
    client: AsyncClient, client_headers, vendor_headers, other_vendor_headers
):
    amendment_id = (await _create(client, client_headers)).json()["id"]

    mine = await client.get("/vendor/amendments", headers=vendor_headers)
    theirs = await client.get("/vendor/amendments", headers=other_vendor_headers)
    assert [a["id"] for a in mine.json()["amendments"]] == [amendment_id]
    assert theirs.json()["amendments"] == []

    hidden = await client.get(f"/amendments/{amendment_id}", headers=other_vendor_headers)
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_admin_view_status_filter(client: AsyncClient, client_headers, admin_headers):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    await _decide(client, admin_headers, amendment_id, "reject")

    requested = await client.get("/admin/amendments", headers=admin_headers)
    rejected = await client.get("/admin/amendments?status=rejected", headers=admin_headers)
    everything = await client.get("/admin/amendments?status=all", headers=admin_headers)
    bogus = await client.get("/admin/amendments?status=vendor_replied", headers=admin_headers)

    assert requested.json()["amendments"] == []
    assert [a["id"] for a in rejected.json()["amendments"]] == [amendment_id]
    assert len(everything.json()["amendments"]) == 1
    assert bogus.status_code == 422
    assert bogus.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_client_view_status_filter(client: AsyncClient, client_headers):
    await _create(client, client_headers)
    r = await client.get("/client/amendments?status=requested", headers=client_headers)
    assert len(r.json()["amendments"]) == 1
    r = await client.get("/client/amendments?pending_only=true", headers=client_headers)
    assert r.json()["amendments"] == []


@pytest.mark.asyncio
async def test_decide_lost_race_returns_409_conflict(
    client: AsyncClient, client_headers, admin_headers, repository, monkeypatch
):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    original_update = repository.update_where

    async def update_after_competing_reject(target_id, expected_status, fields):
        # Another admin's reject commits between our read and our write.
        repository.rows[target_id] = repository.rows[target_id].evolve(status=AmendmentStatus.REJECTED)
        return await original_update(target_id, expected_status, fields)

    monkeypatch.setattr(repository, "update_where", update_after_competing_reject)

    r = await _decide(client, admin_headers, amendment_id, "approve")
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"
    assert repository.rows[amendment_id].status == AmendmentStatus.REJECTED


@pytest.mark.asyncio
async def test_admin_view_blank_status_defaults_to_requested(
    client: AsyncClient, client_headers, admin_headers
):
    kept = (await _create(client, client_headers)).json()["id"]
    rejected = (await _create(client, client_headers)).json()["id"]
    await _decide(client, admin_headers, rejected, "reject")

    r = await client.get("/admin/amendments?status=", headers=admin_headers)
    assert r.status_code == 200
    assert [a["id"] for a in r.json()["amendments"]] == [kept]


@pytest.mark.asyncio
async def test_vendor_extra_cost_beyond_cents_returns_422(
    client: AsyncClient, client_headers, admin_headers, vendor_headers, repository
):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    await _decide(client, admin_headers, amendment_id, "approve")
    await _decide(client, admin_headers, amendment_id, "push")

    r = await _respond(
        client,
        vendor_headers,
        amendment_id,
        {"response": "approve", "extra_cost": "10.005", "delay_days": 1, "reason": "fuel"},
    )
    assert r.status_code == 422
    assert r.json()["error"] == "invalid_input"
    assert repository.rows[amendment_id].status == AmendmentStatus.CLIENT_REVIEW


@pytest.mark.asyncio
async def test_vendor_delay_beyond_column_range_returns_422(
    client: AsyncClient, client_headers, admin_headers, vendor_headers, repository
):
    amendment_id = (await _create(client, client_headers)).json()["id"]
    await _decide(client, admin_headers, amendment_id, "approve")
    await _decide(client, admin_headers, amendment_id, "push")

    r = await _respond(
        client,
        vendor_headers,
        amendment_id,
        {"response": "approve", "extra_cost": 10, "delay_days": 2**31, "reason": "fuel"},
    )
    assert r.status_code == 422
    assert r.json()["error"] == "invalid_input"
    assert repository.rows[amendment_id].status == AmendmentStatus.CLIENT_REVIEW
