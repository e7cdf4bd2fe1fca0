"""Tests for API routes."""

from uuid import uuid4

from fastapi.testclient import TestClient

from packwise.checklist.vault import Vault
from packwise.models import PackingSession, SectionDesignation


def section_id(session: PackingSession, designation: SectionDesignation) -> str:
    return str(session.section_for(designation).id)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client: TestClient):
        """Test the health endpoint returns OK."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"


class TestSessionRoutes:
    """Tests for session routes."""

    def test_create_session(self, client: TestClient, vault: Vault, condition_named):
        """Creating a session seeds it and applies initial conditions."""
        rain = condition_named("Rain Expected")
        response = client.post(
            "/sessions",
            json={
                "title": "Norway Fjords",
                "archetype": "coastal_breeze",
                "departure_at": "2026-07-01T06:00:00Z",
                "condition_ids": [str(rain.id)],
            },
        )
        assert response.status_code == 201

        data = response.json()
        assert data["title"] == "Norway Fjords"
        assert data["active_condition_ids"] == [str(rain.id)]
        assert len(data["sections"]) == 7
        assert data["progress"]["rule_added_count"] == 3
        assert len(vault.sessions) == 1

    def test_create_session_blank_title(self, client: TestClient):
        """A whitespace title is rejected with 400."""
        response = client.post(
            "/sessions",
            json={
                "title": "   ",
                "archetype": "urban_explorer",
                "departure_at": "2026-07-01T06:00:00Z",
            },
        )
        assert response.status_code == 400

    def test_create_session_bad_archetype(self, client: TestClient):
        """An unknown archetype fails validation."""
        response = client.post(
            "/sessions",
            json={
                "title": "Moon",
                "archetype": "lunar",
                "departure_at": "2026-07-01T06:00:00Z",
            },
        )
        assert response.status_code == 422

    def test_list_sessions(
        self,
        client: TestClient,
        alpine_session: PackingSession,
        archived_session: PackingSession,
    ):
        """Active and archived sessions are listed separately."""
        active = client.get("/sessions").json()
        archived = client.get("/sessions/archived").json()

        assert [s["id"] for s in active] == [str(alpine_session.id)]
        assert [s["id"] for s in archived] == [str(archived_session.id)]

    def test_session_not_found(self, client: TestClient):
        """Test 404 for non-existent session."""
        response = client.get(f"/sessions/{uuid4()}")
        assert response.status_code == 404

    def test_archive_and_unarchive(
        self, client: TestClient, alpine_session: PackingSession
    ):
        """Archiving makes the session read-only until unarchived."""
        response = client.post(f"/sessions/{alpine_session.id}/archive")
        assert response.status_code == 200
        assert response.json()["is_archived"] is True

        response = client.patch(
            f"/sessions/{alpine_session.id}", json={"title": "New Name"}
        )
        assert response.status_code == 400

        response = client.post(f"/sessions/{alpine_session.id}/unarchive")
        assert response.json()["is_archived"] is False

    def test_delete_session(
        self, client: TestClient, vault: Vault, alpine_session: PackingSession
    ):
        """Deleting a session removes it."""
        response = client.delete(f"/sessions/{alpine_session.id}")
        assert response.status_code == 204
        assert vault.sessions == []

        response = client.delete(f"/sessions/{alpine_session.id}")
        assert response.status_code == 404

    def test_duplicate_session(self, client: TestClient, alpine_session: PackingSession):
        """Duplicating returns a new session."""
        response = client.post(f"/sessions/{alpine_session.id}/duplicate")
        assert response.status_code == 201
        assert response.json()["id"] != str(alpine_session.id)


class TestConditionToggleRoutes:
    """Tests for toggling and previewing conditions."""

    def test_toggle_condition(
        self, client: TestClient, alpine_session: PackingSession, condition_named
    ):
        """Toggling returns the new state, stats and progress."""
        trekking = condition_named("Trekking / Hiking")
        url = f"/sessions/{alpine_session.id}/conditions/{trekking.id}/toggle"

        data = client.post(url).json()
        assert data["active"] is True
        assert data["stats"]["added"] == 3
        assert data["progress"]["rule_added_count"] == 3

        data = client.post(url).json()
        assert data["active"] is False
        assert data["stats"]["removed"] == 3
        assert data["progress"]["rule_added_count"] == 0

    def test_toggle_unknown_condition(
        self, client: TestClient, alpine_session: PackingSession
    ):
        """Unknown conditions return 404."""
        response = client.post(
            f"/sessions/{alpine_session.id}/conditions/{uuid4()}/toggle"
        )
        assert response.status_code == 404

    def test_toggle_on_archived(
        self, client: TestClient, archived_session: PackingSession, condition_named
    ):
        """Toggling a condition on an archived session fails."""
        rain = condition_named("Rain Expected")
        response = client.post(
            f"/sessions/{archived_session.id}/conditions/{rain.id}/toggle"
        )
        assert response.status_code == 400

    def test_preview(
        self, client: TestClient, alpine_session: PackingSession, condition_named
    ):
        """The preview lists items a toggle would add."""
        rain = condition_named("Rain Expected")
        response = client.get(
            f"/sessions/{alpine_session.id}/conditions/{rain.id}/preview"
        )
        assert response.status_code == 200
        assert response.json() == {
            "added": ["Umbrella", "Waterproof Bag Cover"],
            "removed": [],
        }


class TestItemsRoutes:
    """Tests for item routes."""

    def test_create_item(self, client: TestClient, alpine_session: PackingSession):
        """Test creating a new item."""
        sid = section_id(alpine_session, SectionDesignation.gadgets)
        response = client.post(
            f"/sessions/{alpine_session.id}/sections/{sid}/items",
            json={"name": "Satellite Messenger", "is_critical": True},
        )
        assert response.status_code == 201
        assert response.json()["origin"] == "user"
        assert alpine_session.has_item_named("Satellite Messenger")

    def test_create_item_invalid_quantity(
        self, client: TestClient, alpine_session: PackingSession
    ):
        """Quantity below one fails validation."""
        sid = section_id(alpine_session, SectionDesignation.gadgets)
        response = client.post(
            f"/sessions/{alpine_session.id}/sections/{sid}/items",
            json={"name": "Cable", "quantity": 0},
        )
        assert response.status_code == 422

    def test_create_item_on_archived_session(
        self, client: TestClient, archived_session: PackingSession
    ):
        """Test that creating items on archived sessions fails."""
        sid = section_id(archived_session, SectionDesignation.gadgets)
        response = client.post(
            f"/sessions/{archived_session.id}/sections/{sid}/items",
            json={"name": "Should Fail"},
        )
        assert response.status_code == 400

    def test_toggle_item_packed(self, client: TestClient, alpine_session: PackingSession):
        """Toggling packed returns the item state and session progress."""
        documents = alpine_session.section_for(SectionDesignation.documents)
        item = documents.items[0]

        response = client.post(
            f"/sessions/{alpine_session.id}/sections/{documents.id}"
            f"/items/{item.id}/toggle-packed"
        )
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["is_packed"] is True
        assert data["progress"]["packed_cells"] == 1

    def test_toggle_nonexistent_item(
        self, client: TestClient, alpine_session: PackingSession
    ):
        """Test toggling a non-existent item returns 404."""
        sid = section_id(alpine_session, SectionDesignation.documents)
        response = client.post(
            f"/sessions/{alpine_session.id}/sections/{sid}/items/{uuid4()}/toggle-packed"
        )
        assert response.status_code == 404

    def test_delete_and_restore(
        self, client: TestClient, alpine_session: PackingSession
    ):
        """A deleted item can be restored from its undo capsule."""
        hygiene = alpine_session.section_for(SectionDesignation.hygiene)
        item = hygiene.items[0]

        response = client.delete(
            f"/sessions/{alpine_session.id}/sections/{hygiene.id}/items/{item.id}"
        )
        assert response.status_code == 200
        capsule = response.json()
        assert capsule["item"]["id"] == str(item.id)
        assert hygiene.find_item(item.id) is None

        response = client.post(
            f"/sessions/{alpine_session.id}/items/restore", json=capsule
        )
        assert response.status_code == 201
        assert hygiene.find_item(item.id) is not None

        response = client.post(
            f"/sessions/{alpine_session.id}/items/restore", json=capsule
        )
        assert response.status_code == 400


class TestSectionRoutes:
    """Tests for section routes."""

    def test_mark_complete(self, client: TestClient, alpine_session: PackingSession):
        """Completing a section packs all of its items."""
        sid = section_id(alpine_session, SectionDesignation.footwear)
        response = client.post(f"/sessions/{alpine_session.id}/sections/{sid}/complete")
        assert response.status_code == 200
        assert all(item["is_packed"] for item in response.json()["items"])

    def test_rename_section(self, client: TestClient, alpine_session: PackingSession):
        """Sections can be renamed."""
        sid = section_id(alpine_session, SectionDesignation.gadgets)
        response = client.patch(
            f"/sessions/{alpine_session.id}/sections/{sid}",
            json={"custom_name": "Electronics"},
        )
        assert response.status_code == 200
        assert response.json()["custom_name"] == "Electronics"


class TestConditionRoutes:
    """Tests for the condition catalog routes."""

    def test_list_conditions(self, client: TestClient):
        """The seeded catalog is listed."""
        data = client.get("/conditions").json()
        assert len(data) == 7
        assert all(c["is_built_in"] for c in data)

    def test_create_condition_and_rule(self, client: TestClient):
        """A custom condition can be created and given rules."""
        response = client.post("/conditions", json={"name": "Wedding"})
        assert response.status_code == 201
        condition = response.json()
        assert condition["rule_count"] == 0

        response = client.post(
            f"/conditions/{condition['id']}/rules",
            json={
                "action": "add_item",
                "target_item_name": "Suit",
                "target_section": "clothing",
                "priority": 7,
            },
        )
        assert response.status_code == 201
        rule = response.json()
        assert rule["priority"] == 5
        assert rule["reason_text"] == "Add item: Suit"

        rules = client.get(f"/conditions/{condition['id']}/rules").json()
        assert [r["id"] for r in rules] == [rule["id"]]

        response = client.delete(f"/rules/{rule['id']}")
        assert response.status_code == 204

    def test_rule_for_unknown_condition(self, client: TestClient):
        """Adding a rule to an unknown condition returns 404."""
        response = client.post(
            f"/conditions/{uuid4()}/rules",
            json={
                "action": "add_item",
                "target_item_name": "Suit",
                "target_section": "clothing",
            },
        )
        assert response.status_code == 404

    def test_delete_condition(self, client: TestClient, vault: Vault, condition_named):
        """Deleting a condition cascades to its rules."""
        rain = condition_named("Rain Expected")
        response = client.delete(f"/conditions/{rain.id}")
        assert response.status_code == 204
        assert vault.store.rules_for_condition(rain.id) == []

    def test_sandbox(self, client: TestClient, condition_named):
        """The sandbox lists add_item effects with their condition."""
        transit = condition_named("Long Transit")
        response = client.post(
            "/conditions/sandbox", json={"condition_ids": [str(transit.id)]}
        )
        assert response.status_code == 200
        data = response.json()
        assert [e["item_name"] for e in data] == [
            "Neck Pillow",
            "Compression Socks",
            "eBook / Kindle",
            "Toiletry Zip Bag",
        ]
        assert data[0]["condition_name"] == "Long Transit"


class TestProfileRoutes:
    """Tests for profile routes."""

    def test_get_profile(self, client: TestClient):
        """The profile includes level information."""
        data = client.get("/profile").json()
        assert data["display_name"] == "Traveler"
        assert data["level"] == 1
        assert data["level_title"] == "Novice Packer"

    def test_update_profile(self, client: TestClient):
        """The display name can be changed."""
        response = client.patch("/profile", json={"display_name": "Kai"})
        assert response.status_code == 200
        assert response.json()["display_name"] == "Kai"

    def test_statistics(self, client: TestClient, alpine_session: PackingSession):
        """Statistics reflect created sessions."""
        data = client.get("/profile/statistics").json()
        assert data["total_trips"] == 1

    def test_onboarding(self, client: TestClient):
        """Onboarding can be completed."""
        response = client.post("/profile/onboarding/complete", json={"step": 3})
        assert response.json() == {
            "has_completed_onboarding": True,
            "last_onboarding_step": 3,
        }

    def test_save_now(self, client: TestClient, alpine_session: PackingSession):
        """Saving writes pending documents to the database."""
        response = client.post("/profile/save")
        assert response.status_code == 200
        assert response.json()["documents_written"] >= 3

    def test_reset(self, client: TestClient, vault: Vault, alpine_session: PackingSession):
        """Reset clears sessions."""
        response = client.post("/profile/reset")
        assert response.status_code == 200
        assert vault.sessions == []
