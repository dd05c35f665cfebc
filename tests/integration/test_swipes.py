"""
Integration tests for swipe API endpoints.

Covers:
  POST /api/v1/swipes
  GET  /api/v1/swipes/potential/{user_id}
  GET  /api/v1/swipes/candidates/{user_id}
  GET  /api/v1/swipes/status
"""

from __future__ import annotations

from httpx import AsyncClient


async def _swipe(client: AsyncClient, swiper_id: int, target_id: int, liked: bool):
    return await client.post(
        "/api/v1/swipes",
        json={"swiper_id": swiper_id, "target_id": target_id, "liked": liked},
    )


# ---------------------------------------------------------------------------
# POST /api/v1/swipes
# ---------------------------------------------------------------------------
class TestRecordSwipe:
    async def test_like_returns_outcome(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids

        response = await _swipe(async_client, alice, bob, True)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["match_created"] is False
        assert data["next_candidate"]["id"] == carol
        assert data["next_candidate"]["name"] == "Carol"
        assert "email" not in data["next_candidate"]
        assert data["message"] == "Swipe recorded successfully"

    async def test_mutual_like_creates_match(self, async_client: AsyncClient, user_ids):
        alice, bob, _ = user_ids
        await _swipe(async_client, alice, bob, True)

        response = await _swipe(async_client, bob, alice, True)

        assert response.status_code == 200
        assert response.json()["match_created"] is True

    async def test_dislike_back_creates_no_match(self, async_client: AsyncClient, user_ids):
        alice, bob, _ = user_ids
        await _swipe(async_client, alice, bob, True)

        response = await _swipe(async_client, bob, alice, False)

        assert response.json()["match_created"] is False

    async def test_last_candidate_message(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids
        await _swipe(async_client, alice, bob, False)

        response = await _swipe(async_client, alice, carol, False)

        data = response.json()
        assert data["next_candidate"] is None
        assert data["message"] == (
            "Swipe recorded successfully. No more potential matches available"
        )

    async def test_duplicate_swipe_returns_409(self, async_client: AsyncClient, user_ids):
        alice, bob, _ = user_ids
        await _swipe(async_client, alice, bob, True)

        response = await _swipe(async_client, alice, bob, False)

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "DUPLICATE_SWIPE"
        assert body["status"] == 409
        assert body["message"] == f"User {alice} has already swiped on user {bob}"
        assert "timestamp" in body
        assert set(body) == {"error", "message", "status", "timestamp"}

    async def test_self_swipe_returns_400(self, async_client: AsyncClient, user_ids):
        response = await _swipe(async_client, user_ids[0], user_ids[0], True)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_OPERATION"

    async def test_unknown_user_returns_404(self, async_client: AsyncClient, user_ids):
        response = await _swipe(async_client, user_ids[0], 9999, True)

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "USER_NOT_FOUND"
        assert body["message"] == "User not found with ID: 9999"

    async def test_missing_field_returns_400(self, async_client: AsyncClient, user_ids):
        response = await async_client.post(
            "/api/v1/swipes",
            json={"swiper_id": user_ids[0], "target_id": user_ids[1]},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert any(d["field"].endswith("liked") for d in body["details"])

    async def test_request_id_is_echoed(self, async_client: AsyncClient, user_ids):
        response = await async_client.post(
            "/api/v1/swipes",
            json={"swiper_id": user_ids[0], "target_id": user_ids[1], "liked": True},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"


# ---------------------------------------------------------------------------
# GET /api/v1/swipes/potential/{user_id}
# ---------------------------------------------------------------------------
class TestPotentialMatch:
    async def test_returns_lowest_unvisited(self, async_client: AsyncClient, user_ids):
        alice, bob, _ = user_ids

        response = await async_client.get(f"/api/v1/swipes/potential/{alice}")

        assert response.status_code == 200
        assert response.json()["id"] == bob

    async def test_skips_swiped_users(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids
        await _swipe(async_client, alice, bob, False)

        response = await async_client.get(f"/api/v1/swipes/potential/{alice}")

        assert response.json()["id"] == carol

    async def test_exhausted_returns_404(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids
        await _swipe(async_client, alice, bob, True)
        await _swipe(async_client, alice, carol, False)

        response = await async_client.get(f"/api/v1/swipes/potential/{alice}")

        assert response.status_code == 404
        assert response.json()["error"] == "NO_POTENTIAL_MATCH"

    async def test_unknown_user_returns_404(self, async_client: AsyncClient, user_ids):
        response = await async_client.get("/api/v1/swipes/potential/9999")

        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_FOUND"


# ---------------------------------------------------------------------------
# GET /api/v1/swipes/candidates/{user_id}
# ---------------------------------------------------------------------------
class TestCandidates:
    async def test_lists_unvisited_in_id_order(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids

        response = await async_client.get(f"/api/v1/swipes/candidates/{bob}")

        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [alice, carol]

    async def test_limit_and_skip(self, async_client: AsyncClient, user_ids):
        alice, bob, carol = user_ids

        response = await async_client.get(
            f"/api/v1/swipes/candidates/{alice}", params={"limit": 1, "skip": 1}
        )

        assert [u["id"] for u in response.json()] == [carol]

    async def test_limit_out_of_range_returns_400(self, async_client: AsyncClient, user_ids):
        response = await async_client.get(
            f"/api/v1/swipes/candidates/{user_ids[0]}", params={"limit": 0}
        )

        assert response.status_code == 400


# ---------------------------------------------------------------------------
# GET /api/v1/swipes/status
# ---------------------------------------------------------------------------
class TestSwipeStatus:
    async def test_status_is_directional(self, async_client: AsyncClient, user_ids):
        alice, bob, _ = user_ids
        await _swipe(async_client, alice, bob, False)

        forward = await async_client.get(
            "/api/v1/swipes/status", params={"swiper_id": alice, "target_id": bob}
        )
        backward = await async_client.get(
            "/api/v1/swipes/status", params={"swiper_id": bob, "target_id": alice}
        )

        assert forward.json()["has_swiped"] is True
        assert backward.json()["has_swiped"] is False
