from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.dependencies import get_recipient_scope
from app.main import app
from shared.auth.config import AuthSettings


def _minutes_ago(minutes: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)


@pytest.mark.asyncio
async def test_health(async_client) -> None:
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "notifications"}
    assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_list_notifications_groups_recent_activity(async_client, make_notification) -> None:
    for minutes in (30, 20, 10):
        await make_notification(
            type_="comment", target={"creation_id": 3}, created_at=_minutes_ago(minutes)
        )
    await make_notification(title="System notice", created_at=_minutes_ago(5))

    response = await async_client.get("/api/v1/notifications")

    assert response.status_code == 200
    notifications = response.json()["notifications"]
    assert [n["type"] for n in notifications] == [None, "creation_activity"]
    group = notifications[1]
    assert group["count"] == 3
    assert group["unread_count"] == 3
    assert group["message"] == "3 comments"
    assert group["acknowledged_at"] is None


@pytest.mark.asyncio
async def test_acknowledge_group_entry_reads_every_member(async_client, make_notification) -> None:
    for minutes in (30, 20):
        latest = await make_notification(
            type_="tip", target={"creation_id": 3}, created_at=_minutes_ago(minutes)
        )

    response = await async_client.post("/api/v1/notifications/acknowledge", json={"id": latest.id})
    assert response.status_code == 200
    assert response.json() == {"ok": True, "updated": 2}

    [group] = (await async_client.get("/api/v1/notifications")).json()["notifications"]
    assert group["acknowledged_at"] is not None
    assert group["unread_count"] == 0

    count = await async_client.get("/api/v1/notifications/unread-count")
    assert count.json() == {"count": 0}


@pytest.mark.asyncio
async def test_acknowledge_unknown_id_is_404(async_client) -> None:
    response = await async_client.post("/api/v1/notifications/acknowledge", json={"id": 12345})
    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found."


@pytest.mark.asyncio
async def test_acknowledge_requires_positive_id(async_client) -> None:
    response = await async_client.post("/api/v1/notifications/acknowledge", json={"id": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unread_count_and_acknowledge_all(async_client, make_notification) -> None:
    await make_notification()
    await make_notification(recipient_role="user")

    assert (await async_client.get("/api/v1/notifications/unread-count")).json() == {"count": 2}

    response = await async_client.post("/api/v1/notifications/acknowledge-all")
    assert response.json() == {"ok": True, "updated": 2}
    assert (await async_client.get("/api/v1/notifications/unread-count")).json() == {"count": 0}


@pytest.mark.asyncio
async def test_internal_create_then_list(async_client, recipient) -> None:
    response = await async_client.post(
        "/api/v1/notifications/internal",
        json={
            "recipient_id": str(recipient.recipient_id),
            "type": "tip",
            "target": {"creation_id": 9},
            "title": "You received a tip",
            "message": "Someone tipped you",
            "link": "/creations/9",
        },
    )
    assert response.status_code == 201
    created_id = response.json()["id"]

    [entry] = (await async_client.get("/api/v1/notifications")).json()["notifications"]
    assert entry["id"] == created_id
    assert entry["type"] == "tip"


@pytest.mark.asyncio
async def test_internal_create_requires_recipient(async_client) -> None:
    response = await async_client.post(
        "/api/v1/notifications/internal", json={"title": "Nobody"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_requires_authentication(async_client) -> None:
    app.dependency_overrides.pop(get_recipient_scope)
    response = await async_client.get("/api/v1/notifications")
    assert response.status_code == 401


def _bearer(sub: str, roles: list[str] | None = None) -> dict[str, str]:
    settings = AuthSettings()
    claims = {
        "sub": sub,
        "iss": settings.issuer,
        "aud": settings.audience,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    if roles is not None:
        claims["roles"] = roles
    token = jwt.encode(claims, settings.secret, algorithm=settings.algorithm)
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_signed_user_token_sees_direct_and_role_rows(
    async_client, make_notification, recipient, other_recipient
) -> None:
    app.dependency_overrides.pop(get_recipient_scope)
    await make_notification(title="direct")
    await make_notification(title="everyone", recipient_role="user")
    await make_notification(title="creators", recipient_role="creator")
    await make_notification(title="someone else", recipient_id=other_recipient.recipient_id)

    response = await async_client.get(
        "/api/v1/notifications", headers=_bearer(str(recipient.recipient_id), ["user"])
    )

    assert response.status_code == 200
    titles = {n["title"] for n in response.json()["notifications"]}
    assert titles == {"direct", "everyone"}


@pytest.mark.asyncio
async def test_token_without_roles_is_scoped_to_user_role(
    async_client, make_notification, other_recipient
) -> None:
    app.dependency_overrides.pop(get_recipient_scope)
    await make_notification(recipient_role="user")
    await make_notification(recipient_role="admin")

    response = await async_client.get(
        "/api/v1/notifications/unread-count",
        headers=_bearer(str(other_recipient.recipient_id)),
    )

    assert response.status_code == 200
    assert response.json() == {"count": 1}


@pytest.mark.asyncio
async def test_first_token_role_decides_broadcast_scope(async_client, make_notification) -> None:
    app.dependency_overrides.pop(get_recipient_scope)
    await make_notification(recipient_role="user")
    await make_notification(recipient_role="creator")
    await make_notification(recipient_role="creator")

    response = await async_client.get(
        "/api/v1/notifications/unread-count",
        headers=_bearer("44444444-4444-4444-4444-444444444444", ["creator", "user"]),
    )

    assert response.json() == {"count": 2}
