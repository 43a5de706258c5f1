import pytest
from httpx import AsyncClient
from sqlalchemy import select, update

from sportsapp.models.notification import Notification, NotificationType
from sportsapp.models.user import User


@pytest.fixture
async def rich_user(make_user):
    return await make_user(points=120)


async def redeem(client: AsyncClient, user, headers: dict, points: int):
    return await client.post(
        f"/api/v1/users/{user.id}/redeem-voucher",
        json={"points_redeemed": points, "email": "fan@example.com"},
        headers=headers
    )


@pytest.mark.asyncio
async def test_redeem_deducts_points(client: AsyncClient, rich_user, headers_for, db_session):
    response = await redeem(client, rich_user, headers_for(rich_user), 100)

    assert response.status_code == 201
    data = response.json()
    assert data["voucher_amount"] == 100
    assert data["status"] == "under review"

    await db_session.refresh(rich_user)
    assert rich_user.points == 20


@pytest.mark.asyncio
async def test_redeem_checks_balance_in_the_database(client: AsyncClient, rich_user, headers_for, db_session):
    # Another request spent points; the session still holds the old balance
    await db_session.execute(
        update(User).where(User.id == rich_user.id).values(points=30)
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()
    assert rich_user.points == 120

    response = await redeem(client, rich_user, headers_for(rich_user), 100)

    assert response.status_code == 400
    await db_session.refresh(rich_user)
    assert rich_user.points == 30


@pytest.mark.asyncio
@pytest.mark.parametrize("points", [0, -5, 121])
async def test_redeem_invalid_amounts(client: AsyncClient, rich_user, headers_for, points):
    response = await redeem(client, rich_user, headers_for(rich_user), points)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_redeem_for_someone_else(client: AsyncClient, rich_user, auth_headers):
    response = await redeem(client, rich_user, auth_headers, 10)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_redemption_history(client: AsyncClient, rich_user, headers_for):
    headers = headers_for(rich_user)
    first = (await redeem(client, rich_user, headers, 10)).json()
    second = (await redeem(client, rich_user, headers, 20)).json()

    response = await client.get(f"/api/v1/users/{rich_user.id}/redemptions", headers=headers)

    assert [item["id"] for item in response.json()] == [second["id"], first["id"]]


class TestAdminReview:

    @pytest.mark.asyncio
    async def test_list_requires_admin(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/admin/redemptions", headers=auth_headers)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_includes_user(self, client: AsyncClient, admin_client: AsyncClient, rich_user, headers_for):
        await redeem(client, rich_user, headers_for(rich_user), 50)

        response = await admin_client.get("/api/v1/admin/redemptions")

        assert response.status_code == 200
        assert response.json()[0]["user"]["id"] == rich_user.id

    @pytest.mark.asyncio
    async def test_approve(self, client: AsyncClient, admin_client: AsyncClient, rich_user, headers_for, db_session):
        redemption = (await redeem(client, rich_user, headers_for(rich_user), 50)).json()

        response = await admin_client.put(
            f"/api/v1/admin/redemptions/{redemption['id']}/status",
            json={"status": "approved"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        await db_session.refresh(rich_user)
        assert rich_user.points == 70

        result = await db_session.execute(select(Notification).where(Notification.user_id == rich_user.id))
        assert result.scalar_one().type == NotificationType.REDEMPTION_APPROVED

    @pytest.mark.asyncio
    async def test_reject_refunds(self, client: AsyncClient, admin_client: AsyncClient, rich_user, headers_for, db_session):
        redemption = (await redeem(client, rich_user, headers_for(rich_user), 50)).json()

        response = await admin_client.put(
            f"/api/v1/admin/redemptions/{redemption['id']}/status",
            json={"status": "rejected"}
        )

        assert response.status_code == 200
        await db_session.refresh(rich_user)
        assert rich_user.points == 120

        result = await db_session.execute(select(Notification).where(Notification.user_id == rich_user.id))
        assert result.scalar_one().type == NotificationType.REDEMPTION_REJECTED

    @pytest.mark.asyncio
    async def test_decision_is_final(self, client: AsyncClient, admin_client: AsyncClient, rich_user, headers_for, db_session):
        redemption = (await redeem(client, rich_user, headers_for(rich_user), 50)).json()
        url = f"/api/v1/admin/redemptions/{redemption['id']}/status"
        await admin_client.put(url, json={"status": "rejected"})

        response = await admin_client.put(url, json={"status": "rejected"})

        assert response.status_code == 409
        await db_session.refresh(rich_user)
        assert rich_user.points == 120

    @pytest.mark.asyncio
    async def test_invalid_target_status(self, client: AsyncClient, admin_client: AsyncClient, rich_user, headers_for):
        redemption = (await redeem(client, rich_user, headers_for(rich_user), 5)).json()

        unknown = await admin_client.put(
            f"/api/v1/admin/redemptions/{redemption['id']}/status",
            json={"status": "paid"}
        )
        back_to_review = await admin_client.put(
            f"/api/v1/admin/redemptions/{redemption['id']}/status",
            json={"status": "under review"}
        )

        assert unknown.status_code == 422
        assert back_to_review.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_redemption(self, admin_client: AsyncClient, client: AsyncClient):
        response = await admin_client.put("/api/v1/admin/redemptions/321/status", json={"status": "approved"})

        assert response.status_code == 404
