"""HTTP contract tests for /api/customers."""

from datetime import timedelta
import uuid

import pytest
from dateutil.relativedelta import relativedelta

from tests.conftest import NOW


def payload(**overrides) -> dict:
    body = {
        "name": "Bob Smith",
        "email": "bob@example.com",
        "annualSpend": 2500,
        "lastPurchaseDate": (NOW - relativedelta(months=8)).isoformat(),
    }
    body.update(overrides)
    return body


async def create(client, **overrides) -> dict:
    response = await client.post("/api/customers", json=payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


# ── Create ────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_returns_201_with_computed_tier(client):
    supplied_id = str(uuid.uuid4())
    response = await client.post("/api/customers", json=payload(id=supplied_id))

    assert response.status_code == 201
    body = response.json()
    assert body["id"] != supplied_id
    uuid.UUID(body["id"])
    assert body["name"] == "Bob Smith"
    assert body["email"] == "bob@example.com"
    assert body["annualSpend"] == 2500
    assert body["lastPurchaseDate"] is not None
    assert body["membershipTier"] == "GOLD"


@pytest.mark.asyncio
async def test_create_without_optional_fields_is_silver(client):
    body = await create(client, annualSpend=None, lastPurchaseDate=None)

    assert body["annualSpend"] is None
    assert body["lastPurchaseDate"] is None
    assert body["membershipTier"] == "SILVER"


@pytest.mark.asyncio
async def test_create_duplicate_email_is_409(client):
    await create(client)

    response = await client.post("/api/customers", json=payload(name="Other Bob"))

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]
    listing = await client.get("/api/customers")
    assert len(listing.json()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"name": "   "},
        {"email": "not-an-email"},
        {"email": ""},
        {"annualSpend": "12.345"},
        {"lastPurchaseDate": "2026-01-01T00:00:00"},  # no offset
    ],
)
async def test_create_invalid_input_is_400(client, overrides):
    response = await client.post("/api/customers", json=payload(**overrides))

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid input data"


@pytest.mark.asyncio
async def test_create_missing_required_fields_is_400(client):
    response = await client.post("/api/customers", json={"annualSpend": 100})
    assert response.status_code == 400


# ── Read ──────────────────────────────────────────

@pytest.mark.asyncio
async def test_get_by_id(client):
    created = await create(client)

    response = await client.get(f"/api/customers/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_get_unknown_id_is_404(client):
    missing = uuid.uuid4()
    response = await client.get(f"/api/customers/{missing}")

    assert response.status_code == 404
    assert response.json()["detail"] == f"Customer not found with id: {missing}"


@pytest.mark.asyncio
async def test_get_malformed_id_is_400(client):
    response = await client.get("/api/customers/not-a-uuid")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_all(client):
    await create(client)
    await create(client, name="Alice Johnson", email="alice@example.com", annualSpend=800)

    response = await client.get("/api/customers")

    assert response.status_code == 200
    assert {c["email"] for c in response.json()} == {"bob@example.com", "alice@example.com"}


@pytest.mark.asyncio
async def test_filter_by_email(client):
    created = await create(client)

    response = await client.get("/api/customers", params={"email": "bob@example.com"})

    assert response.status_code == 200
    assert response.json() == [created]


@pytest.mark.asyncio
async def test_filter_by_unknown_email_is_404(client):
    response = await client.get("/api/customers", params={"email": "ghost@example.com"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Customer not found with email: ghost@example.com"


@pytest.mark.asyncio
async def test_filter_by_name_fragment(client):
    await create(client)
    await create(client, name="Alice Johnson", email="alice@example.com")

    response = await client.get("/api/customers", params={"name": "Smith"})

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Bob Smith"]


@pytest.mark.asyncio
async def test_name_filter_wins_over_email(client):
    await create(client)

    response = await client.get("/api/customers", params={"name": "Nobody", "email": "bob@example.com"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_filter_by_tier(client):
    await create(client)  # GOLD
    platinum = await create(
        client,
        name="Carol Williams",
        email="carol@example.com",
        annualSpend=15000,
        lastPurchaseDate=(NOW - relativedelta(months=3)).isoformat(),
    )
    await create(client, name="Frank Miller", email="frank@example.com", annualSpend=5000, lastPurchaseDate=None)

    response = await client.get("/api/customers/tier/PLATINUM")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == [platinum["id"]]

    silver = await client.get("/api/customers/tier/SILVER")
    assert [c["email"] for c in silver.json()] == ["frank@example.com"]


@pytest.mark.asyncio
async def test_filter_by_unknown_tier_is_400(client):
    response = await client.get("/api/customers/tier/BRONZE")
    assert response.status_code == 400


# ── Update ────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_recomputes_tier(client):
    created = await create(client)
    assert created["membershipTier"] == "GOLD"

    response = await client.put(
        f"/api/customers/{created['id']}",
        json=payload(annualSpend=15000, lastPurchaseDate=(NOW - relativedelta(months=2)).isoformat()),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["membershipTier"] == "PLATINUM"

    reread = await client.get(f"/api/customers/{created['id']}")
    assert reread.json()["membershipTier"] == "PLATINUM"


@pytest.mark.asyncio
async def test_update_unknown_id_is_404(client):
    response = await client.put(f"/api/customers/{uuid.uuid4()}", json=payload())
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_to_taken_email_is_409(client):
    await create(client)
    alice = await create(client, name="Alice", email="alice@example.com")

    response = await client.put(f"/api/customers/{alice['id']}", json=payload(name="Alice"))

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_invalid_body_is_400(client):
    created = await create(client)
    response = await client.put(f"/api/customers/{created['id']}", json=payload(email="nope"))
    assert response.status_code == 400


# ── Delete ────────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_is_204_then_404(client):
    created = await create(client)

    first = await client.delete(f"/api/customers/{created['id']}")
    assert first.status_code == 204
    assert first.content == b""

    second = await client.delete(f"/api/customers/{created['id']}")
    assert second.status_code == 404

    gone = await client.get(f"/api/customers/{created['id']}")
    assert gone.status_code == 404


# ── Misc ──────────────────────────────────────────

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_purchase_just_inside_six_months_over_http(client):
    body = await create(
        client,
        annualSpend=10000,
        lastPurchaseDate=(NOW - relativedelta(months=6) + timedelta(seconds=1)).isoformat(),
    )
    assert body["membershipTier"] == "PLATINUM"


@pytest.mark.asyncio
async def test_mixed_case_email_round_trips_unchanged(client):
    created = await create(client, email="Bob@Example.COM")
    assert created["email"] == "Bob@Example.COM"

    lookup = await client.get("/api/customers", params={"email": "Bob@Example.COM"})
    assert lookup.status_code == 200
    assert [c["id"] for c in lookup.json()] == [created["id"]]

    # differently-cased address is a different stored value
    other = await client.post("/api/customers", json=payload(email="Bob@example.com"))
    assert other.status_code == 201
    assert other.json()["email"] == "Bob@example.com"
