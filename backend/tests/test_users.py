import pytest
from httpx import AsyncClient

from sportsapp.models.user import VerificationStatus


@pytest.mark.asyncio
async def test_check_username_available(client: AsyncClient):
    response = await client.get("/api/v1/users/check-username", params={"username": "fresh_name"})

    assert response.status_code == 200
    assert response.json() == {"available": True, "suggestions": []}


@pytest.mark.asyncio
async def test_check_username_taken_suggests_free_names(client: AsyncClient, make_user):
    await make_user(username="virat")

    response = await client.get("/api/v1/users/check-username", params={"username": "virat"})

    assert response.json() == {"available": False, "suggestions": ["virat01", "virat02"]}


@pytest.mark.asyncio
async def test_check_username_falls_back_to_i_suffix(client: AsyncClient, make_user):
    await make_user(username="dhoni")
    await make_user(username="dhoni01")

    response = await client.get("/api/v1/users/check-username", params={"username": "dhoni"})

    assert response.json() == {"available": False, "suggestions": ["dhoni02", "dhonii"]}


@pytest.mark.asyncio
async def test_check_username_for_update_own_name_is_available(client: AsyncClient, test_user, auth_headers):
    response = await client.get(
        "/api/v1/users/check-username-availability",
        params={"username": test_user.username},
        headers=auth_headers
    )

    assert response.json()["available"] is True


@pytest.mark.asyncio
async def test_check_username_for_update_taken(client: AsyncClient, make_user, auth_headers):
    await make_user(username="sindhu")
    await make_user(username="sindhu01")

    response = await client.get(
        "/api/v1/users/check-username-availability",
        params={"username": "sindhu"},
        headers=auth_headers
    )

    assert response.json() == {"available": False, "suggestions": ["sindhu02"]}


@pytest.mark.asyncio
async def test_check_email_and_phone(client: AsyncClient, test_user):
    taken_email = await client.get("/api/v1/users/check-email", params={"email": test_user.email})
    free_phone = await client.get("/api/v1/users/check-phone", params={"phone": "0000000"})

    assert taken_email.json()["available"] is False
    assert free_phone.json()["available"] is True


class TestSearch:
    """Ranked user search"""

    @pytest.mark.asyncio
    async def test_empty_query(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/users/search", params={"q": "  "}, headers=auth_headers)

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_tiers_and_exclusion(self, client: AsyncClient, make_user, test_user, auth_headers):
        contains = await make_user(username="the_rohit_fan", full_name="Someone Else")
        starts = await make_user(username="rohitsharma", full_name="Rohit Sharma")
        exact = await make_user(username="rohit", full_name="R Kumar")

        response = await client.get("/api/v1/users/search", params={"q": "ROHIT"}, headers=auth_headers)

        ids = [user["id"] for user in response.json()]
        assert ids == [exact.id, starts.id, contains.id]
        assert test_user.id not in ids

    @pytest.mark.asyncio
    async def test_excludes_caller(self, client: AsyncClient, make_user, headers_for):
        me = await make_user(username="kohli")

        response = await client.get("/api/v1/users/search", params={"q": "kohli"}, headers=headers_for(me))

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_caps_results(self, client: AsyncClient, make_user, auth_headers):
        for index in range(5):
            await make_user(username=f"player{index:02d}")
            await make_user(username=f"aplayer{index:02d}")

        response = await client.get("/api/v1/users/search", params={"q": "player"}, headers=auth_headers)

        assert len(response.json()) == 8


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, test_user):
    response = await client.get(f"/api/v1/users/{test_user.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == test_user.username
    assert "email" not in data


@pytest.mark.asyncio
async def test_get_profile_not_found(client: AsyncClient):
    response = await client.get("/api/v1/users/99999")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, test_user, auth_headers):
    response = await client.put(
        f"/api/v1/users/{test_user.id}",
        json={"bio": "Weekend cricketer", "user_type": "Athlete", "username": "new.name"},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["bio"] == "Weekend cricketer"
    assert data["user_type"] == "Athlete"
    assert data["username"] == "new.name"


@pytest.mark.asyncio
async def test_update_profile_of_someone_else(client: AsyncClient, other_user, auth_headers):
    response = await client.put(
        f"/api/v1/users/{other_user.id}",
        json={"bio": "hijacked"},
        headers=auth_headers
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_profile_duplicate_username(client: AsyncClient, test_user, other_user, auth_headers):
    response = await client.put(
        f"/api/v1/users/{test_user.id}",
        json={"username": other_user.username},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"


@pytest.mark.asyncio
async def test_upload_profile_picture(client: AsyncClient, test_user, auth_headers):
    response = await client.post(
        f"/api/v1/users/{test_user.id}/profile-picture",
        files={"profile_picture": ("me.png", b"\x89PNG....", "image/png")},
        headers=auth_headers
    )

    assert response.status_code == 200
    url = response.json()["profile_picture"]
    assert url.startswith("/uploads/profilePicture-")
    assert url.endswith(".png")


@pytest.mark.asyncio
async def test_upload_profile_picture_rejects_video(client: AsyncClient, test_user, auth_headers):
    response = await client.post(
        f"/api/v1/users/{test_user.id}/profile-picture",
        files={"profile_picture": ("clip.mp4", b"0000", "video/mp4")},
        headers=auth_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_request_verification(client: AsyncClient, test_user, auth_headers):
    response = await client.post(f"/api/v1/users/{test_user.id}/request-verification", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["verification_status"] == VerificationStatus.PENDING.value

    me = await client.get("/api/v1/auth/me", headers=auth_headers)
    assert me.json()["verification_request_date"] is not None


@pytest.mark.asyncio
async def test_user_posts_require_auth(client: AsyncClient, test_user):
    response = await client.get(f"/api/v1/users/{test_user.id}/posts")

    assert response.status_code == 401
