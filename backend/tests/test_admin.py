import pytest
from httpx import AsyncClient
from sqlalchemy import select

from sportsapp.core.config import settings
from sportsapp.models.notification import Notification, NotificationType
from sportsapp.models.post import Comment, Post, PostType, ReportedPost
from sportsapp.models.user import User, VerificationStatus


class TestAdminSession:
    """Admin login is independent of user accounts"""

    @pytest.mark.asyncio
    async def test_login_sets_admin_cookie(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/admin/login",
            json={"username": "admin", "password": "admin-test-password"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Admin login successful", "is_admin": True}
        assert settings.ADMIN_COOKIE_NAME in response.cookies

        status = await client.get("/api/v1/admin/status")
        assert status.json() == {"is_admin": True}

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/admin/login",
            json={"username": "admin", "password": "guess"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid admin credentials"

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/admin/login", json={"username": "admin"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_regular_user_is_not_admin(self, client: AsyncClient, auth_headers):
        status = await client.get("/api/v1/admin/status", headers=auth_headers)
        users = await client.get("/api/v1/admin/users", headers=auth_headers)

        assert status.json() == {"is_admin": False}
        assert users.status_code == 401

    @pytest.mark.asyncio
    async def test_logout(self, client: AsyncClient):
        await client.post("/api/v1/admin/login", json={"username": "admin", "password": "admin-test-password"})

        response = await client.post("/api/v1/admin/logout")

        assert response.status_code == 200
        assert (await client.get("/api/v1/admin/status")).json() == {"is_admin": False}


@pytest.mark.asyncio
async def test_dashboard_stats(admin_client: AsyncClient, db_session, test_user, other_user):
    db_session.add_all([
        Post(user_id=test_user.id, type=PostType.TEXT, content="one"),
        Post(user_id=test_user.id, type=PostType.TEXT, content="two", is_reported=True),
    ])
    other_user.verification_status = VerificationStatus.PENDING
    await db_session.commit()

    response = await admin_client.get("/api/v1/admin/posts/stats")

    assert response.status_code == 200
    assert response.json() == {
        "total_posts": 2,
        "new_posts_24h": 2,
        "total_users": 2,
        "reported_posts": 1,
        "pending_verifications": 1,
        "pending_drills": 0,
        "pending_redemptions": 0,
        "pending_applications": 0,
    }


@pytest.mark.asyncio
async def test_admin_post_listing(admin_client: AsyncClient, db_session, test_user):
    db_session.add(Post(user_id=test_user.id, type=PostType.TEXT, content="hello"))
    await db_session.commit()

    response = await admin_client.get("/api/v1/admin/posts")

    assert response.status_code == 200
    assert response.json()[0]["user"]["username"] == test_user.username


class TestUserModeration:

    @pytest.mark.asyncio
    async def test_list_users_includes_contact_details(self, admin_client: AsyncClient, test_user):
        response = await admin_client.get("/api/v1/admin/users")

        assert response.status_code == 200
        assert response.json()[0]["email"] == test_user.email

    @pytest.mark.asyncio
    async def test_delete_user_cascades(self, admin_client: AsyncClient, db_session, test_user, other_user):
        post = Post(user_id=test_user.id, type=PostType.TEXT, content="bye")
        db_session.add(post)
        await db_session.flush()
        db_session.add(Comment(post_id=post.id, user_id=other_user.id, content="see ya"))
        await db_session.commit()
        user_id = test_user.id

        response = await admin_client.delete(f"/api/v1/admin/users/{user_id}")

        assert response.status_code == 200
        db_session.expunge_all()
        assert await db_session.get(User, user_id) is None
        assert (await db_session.execute(select(Post))).scalars().all() == []
        assert (await db_session.execute(select(Comment))).scalars().all() == []

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, admin_client: AsyncClient):
        response = await admin_client.delete("/api/v1/admin/users/987654")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_verification_queue(self, client: AsyncClient, admin_client: AsyncClient, test_user, auth_headers):
        await client.post(f"/api/v1/users/{test_user.id}/request-verification", headers=auth_headers)

        response = await admin_client.get("/api/v1/admin/verification-requests")

        assert [user["id"] for user in response.json()] == [test_user.id]

    @pytest.mark.asyncio
    async def test_verify_user(self, admin_client: AsyncClient, test_user, db_session):
        response = await admin_client.post(f"/api/v1/admin/verify-user/{test_user.id}")

        assert response.status_code == 200
        assert response.json()["verification_status"] == "verified"
        assert response.json()["is_verified"] is True

        result = await db_session.execute(select(Notification).where(Notification.user_id == test_user.id))
        notification = result.scalar_one()
        assert notification.type == NotificationType.VERIFICATION_APPROVED
        assert notification.message == "You are now a verified user"

    @pytest.mark.asyncio
    async def test_reject_user(self, admin_client: AsyncClient, test_user, db_session):
        response = await admin_client.post(f"/api/v1/admin/reject-user/{test_user.id}")

        assert response.status_code == 200
        assert response.json()["verification_status"] == "rejected"
        assert response.json()["is_verified"] is False

        result = await db_session.execute(select(Notification).where(Notification.user_id == test_user.id))
        assert result.scalar_one().type == NotificationType.VERIFICATION_REJECTED


class TestReports:

    @pytest.fixture
    async def reported_post(self, db_session, test_user, other_user) -> ReportedPost:
        post = Post(user_id=test_user.id, type=PostType.TEXT, content="spam spam", is_reported=True)
        db_session.add(post)
        await db_session.flush()
        report = ReportedPost(post_id=post.id, reported_by=other_user.id, reason="spam")
        db_session.add(report)
        await db_session.commit()
        return report

    @pytest.mark.asyncio
    async def test_list_reports(self, admin_client: AsyncClient, reported_post, other_user):
        response = await admin_client.get("/api/v1/admin/reported-posts")

        assert response.status_code == 200
        report = response.json()[0]
        assert report["reason"] == "spam"
        assert report["reporter"]["id"] == other_user.id
        assert report["post"]["content"] == "spam spam"

    @pytest.mark.asyncio
    async def test_ignore_report_clears_flag(self, admin_client: AsyncClient, reported_post, db_session):
        response = await admin_client.delete(f"/api/v1/admin/reported-posts/{reported_post.id}")

        assert response.status_code == 200
        db_session.expunge_all()
        post = await db_session.get(Post, reported_post.post_id)
        assert post is not None
        assert post.is_reported is False

    @pytest.mark.asyncio
    async def test_delete_reported_post(self, admin_client: AsyncClient, reported_post, db_session):
        response = await admin_client.delete(f"/api/v1/admin/posts/{reported_post.post_id}")

        assert response.status_code == 200
        listing = await admin_client.get("/api/v1/admin/reported-posts")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_ignore_missing_report(self, admin_client: AsyncClient):
        response = await admin_client.delete("/api/v1/admin/reported-posts/4321")

        assert response.status_code == 404
