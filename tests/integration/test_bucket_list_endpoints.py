"""Integration tests for bucket list and insights endpoints."""
import pytest


pytestmark = pytest.mark.integration


async def _auth_headers(app_client, email):
    await app_client.post(
        "/auth/register",
        json={"email": email, "password": "password123"},
    )
    login_response = await app_client.post(
        "/auth/login",
        json={"email": email, "password": "password123"},
    )
    token = login_response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
class TestBucketListLifecycle:
    """Tests for creating, completing, reopening and deleting items."""

    async def test_item_lifecycle(self, app_client):
        """Test completion dates follow status changes."""
        headers = await _auth_headers(app_client, "life@example.com")

        created = await app_client.post(
            "/bucket-list",
            json={"title": "Visit Iceland", "category": "Travel", "target_date": "2025-07-01"},
            headers=headers,
        )
        assert created.status_code == 201
        item_id = created.json()["id"]
        assert isinstance(item_id, int)

        completed = await app_client.patch(
            f"/bucket-list/{item_id}",
            json={"status": "Completed"},
            headers=headers,
        )
        assert completed.json()["completion_date"] == "2025-06-15"

        reopened = await app_client.patch(
            f"/bucket-list/{item_id}",
            json={"status": "In Progress"},
            headers=headers,
        )
        assert reopened.json()["completion_date"] is None

        deleted = await app_client.delete(f"/bucket-list/{item_id}", headers=headers)
        assert deleted.status_code == 204

        missing = await app_client.get(f"/bucket-list/{item_id}", headers=headers)
        assert missing.status_code == 404

    async def test_ids_increase(self, app_client):
        """Test the store assigns increasing integer ids."""
        headers = await _auth_headers(app_client, "ids@example.com")

        first = await app_client.post("/bucket-list", json={"title": "First goal"}, headers=headers)
        second = await app_client.post("/bucket-list", json={"title": "Second goal"}, headers=headers)

        assert second.json()["id"] > first.json()["id"]

    async def test_items_are_owner_scoped(self, app_client):
        """Test one user cannot read another user's items."""
        owner = await _auth_headers(app_client, "owner@example.com")
        other = await _auth_headers(app_client, "other@example.com")

        created = await app_client.post("/bucket-list", json={"title": "Private goal"}, headers=owner)
        item_id = created.json()["id"]

        response = await app_client.get(f"/bucket-list/{item_id}", headers=other)
        listing = await app_client.get("/bucket-list", headers=other)

        assert response.status_code == 404
        assert listing.json() == []


@pytest.mark.asyncio
class TestInsightsFlow:
    """Tests for insights over stored items."""

    async def test_reminder_dismissal_round_trip(self, app_client):
        """Test dismissing and resetting a reminder through the API."""
        headers = await _auth_headers(app_client, "remind@example.com")
        created = await app_client.post(
            "/bucket-list",
            json={"title": "Renew passport", "target_date": "2025-06-20"},
            headers=headers,
        )
        item_id = created.json()["id"]

        before = await app_client.get("/insights/reminders", headers=headers)
        assert before.json()["active"][0]["status_text"] == "Due in 5 days"

        dismissed = await app_client.post(f"/insights/reminders/{item_id}/dismiss", headers=headers)
        assert dismissed.json()["active"] == []

        reset = await app_client.delete("/insights/reminders/dismissed", headers=headers)
        assert reset.status_code == 204

        after = await app_client.get("/insights/reminders", headers=headers)
        assert [r["item_id"] for r in after.json()["active"]] == [item_id]

    async def test_first_completion_earns_badge(self, app_client):
        """Test completing an item earns First Steps."""
        headers = await _auth_headers(app_client, "badge@example.com")
        await app_client.post(
            "/bucket-list",
            json={"title": "Write a poem", "status": "Completed"},
            headers=headers,
        )

        response = await app_client.get("/insights/achievements", headers=headers)

        assert [entry["id"] for entry in response.json()["earned"]] == ["first-complete"]
