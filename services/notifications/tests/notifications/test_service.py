from datetime import datetime, timezone

import pytest

from app.notifications import service


@pytest.mark.asyncio
async def test_list_is_scoped_to_recipient_and_role(
    db_session, make_notification, recipient, other_recipient
) -> None:
    mine = await make_notification(title="mine")
    broadcast = await make_notification(title="for users", recipient_role="user")
    await make_notification(title="someone else", recipient_id=other_recipient.recipient_id)
    await make_notification(title="for creators", recipient_role="creator")

    rows = await service.list_notifications(recipient, db_session)

    assert {r.id for r in rows} == {mine.id, broadcast.id}


@pytest.mark.asyncio
async def test_list_is_newest_first(db_session, make_notification, recipient) -> None:
    older = await make_notification(created_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    newer = await make_notification(created_at=datetime(2026, 2, 1, tzinfo=timezone.utc))

    rows = await service.list_notifications(recipient, db_session)

    assert [r.id for r in rows] == [newer.id, older.id]


@pytest.mark.asyncio
async def test_get_by_id_respects_scope(
    db_session, make_notification, recipient, other_recipient
) -> None:
    other = await make_notification(recipient_id=other_recipient.recipient_id)

    assert await service.get_notification_by_id(other.id, recipient, db_session) is None
    found = await service.get_notification_by_id(other.id, other_recipient, db_session)
    assert found is not None and found.id == other.id


@pytest.mark.asyncio
async def test_count_unread(db_session, make_notification, recipient, other_recipient) -> None:
    await make_notification()
    await make_notification()
    await make_notification(recipient_id=other_recipient.recipient_id)
    first = await make_notification()
    await service.acknowledge_by_id(first.id, recipient, db_session)
    await db_session.commit()

    assert await service.count_unread(recipient, db_session) == 2


@pytest.mark.asyncio
async def test_acknowledge_by_id_only_changes_unread_rows(
    db_session, make_notification, recipient
) -> None:
    row = await make_notification()

    assert await service.acknowledge_by_id(row.id, recipient, db_session) == 1
    assert await service.acknowledge_by_id(row.id, recipient, db_session) == 0


@pytest.mark.asyncio
async def test_acknowledge_for_creation_matches_target_and_link(
    db_session, make_notification, recipient, other_recipient
) -> None:
    by_target = await make_notification(type_="comment", target={"creation_id": 9})
    by_link = await make_notification(type_="tip", link="/creations/9")
    legacy = await make_notification(link="/creations/9")
    unrelated = await make_notification(type_="comment", target={"creation_id": 10})
    foreign = await make_notification(
        type_="comment",
        target={"creation_id": 9},
        recipient_id=other_recipient.recipient_id,
    )

    updated = await service.acknowledge_for_recipient_and_creation(recipient, 9, db_session)
    await db_session.commit()

    assert updated == 3
    rows = {r.id: r for r in await service.list_notifications(recipient, db_session)}
    assert rows[by_target.id].acknowledged_at is not None
    assert rows[by_link.id].acknowledged_at is not None
    assert rows[legacy.id].acknowledged_at is not None
    assert rows[unrelated.id].acknowledged_at is None
    foreign_row = await service.get_notification_by_id(foreign.id, other_recipient, db_session)
    assert foreign_row.acknowledged_at is None


@pytest.mark.asyncio
async def test_acknowledge_all(db_session, make_notification, recipient, other_recipient) -> None:
    await make_notification()
    await make_notification(recipient_role="user")
    await make_notification(recipient_id=other_recipient.recipient_id)

    assert await service.acknowledge_all_for_recipient(recipient, db_session) == 2
    await db_session.commit()
    assert await service.count_unread(recipient, db_session) == 0
    assert await service.count_unread(other_recipient, db_session) == 1


@pytest.mark.asyncio
async def test_create_requires_a_recipient(db_session) -> None:
    with pytest.raises(ValueError):
        await service.create_notification(title="nobody", db=db_session)
