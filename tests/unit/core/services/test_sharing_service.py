"""Tests for SharingService."""

import uuid

import pytest
from sqlalchemy import select

from notecollab.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from notecollab.core.models import Notification, NotificationType, SharePermission, UserTarget
from notecollab.core.schemas.notes import NoteCreate
from notecollab.core.services.note_service import NoteService
from notecollab.core.services.notification_service import NotificationService
from notecollab.core.services.sharing_service import SharingService


@pytest.fixture
def note_service(test_session):
    return NoteService(test_session)


@pytest.fixture
def sharing_service(test_session, offline_redis):
    return SharingService(
        test_session, notifications=NotificationService(test_session, redis_client=offline_redis)
    )


@pytest.fixture
async def note(note_service, owner):
    return await note_service.create_note(owner.id, NoteCreate(title="Plan", content="draft"))


async def notifications_for(session, user_id):
    result = await session.execute(select(Notification).where(Notification.recipient_id == user_id))
    return list(result.scalars())


class TestShareWithUser:
    async def test_first_grant_sets_flag_and_notifies(
        self, sharing_service, note_service, test_session, note, owner, collaborator
    ):
        share = await sharing_service.share_with_user(
            note.id, owner.id, collaborator.id, SharePermission.COMMENT
        )

        assert share.target_type == "user"
        assert share.target_user_id == collaborator.id
        assert share.target_group_id is None
        assert share.permission == SharePermission.COMMENT
        assert share.shared_by_user_id == owner.id

        refreshed = await note_service.get_note(note.id, owner.id)
        assert refreshed.is_shared is True
        assert len(refreshed.shares) == 1

        sent = await notifications_for(test_session, collaborator.id)
        assert len(sent) == 1
        assert sent[0].type == NotificationType.NOTE_SHARED
        assert sent[0].actor_id == owner.id
        assert sent[0].note_id == note.id
        assert sent[0].message == 'Note "Plan" was shared with you'
        assert sent[0].data == {"permission": "COMMENT"}

    async def test_resharing_updates_the_single_grant(
        self, sharing_service, test_session, note, owner, collaborator
    ):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id, SharePermission.VIEW)
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id, SharePermission.EDIT)

        shares = await sharing_service.list_shares(note.id, owner.id)
        assert len(shares) == 1
        assert shares[0].permission == SharePermission.EDIT
        assert len(await notifications_for(test_session, collaborator.id)) == 1

    async def test_cannot_share_with_self(self, sharing_service, note, owner):
        with pytest.raises(ValidationError):
            await sharing_service.share_with_user(note.id, owner.id, owner.id)

    async def test_unknown_user(self, sharing_service, note, owner):
        with pytest.raises(NotFoundError):
            await sharing_service.share_with_user(note.id, owner.id, uuid.uuid4())

    async def test_only_owner_can_share(self, sharing_service, note, owner, collaborator, outsider):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id, SharePermission.EDIT)
        with pytest.raises(ForbiddenError):
            await sharing_service.share_with_user(note.id, collaborator.id, outsider.id)

    async def test_unknown_note(self, sharing_service, owner, collaborator):
        with pytest.raises(NotFoundError):
            await sharing_service.share_with_user(uuid.uuid4(), owner.id, collaborator.id)

    async def test_deleted_note_cannot_be_shared(
        self, sharing_service, note_service, note, owner, collaborator
    ):
        await note_service.delete_note(note.id, owner.id)
        with pytest.raises(NotFoundError):
            await sharing_service.share_with_user(note.id, owner.id, collaborator.id)


class TestShareWithGroup:
    async def test_group_grant(self, sharing_service, test_session, note, owner, collaborator, team):
        share = await sharing_service.share_with_group(note.id, owner.id, team.id, SharePermission.EDIT)

        assert share.target_type == "group"
        assert share.target_group_id == team.id
        assert await notifications_for(test_session, collaborator.id) == []

        shared = await sharing_service.list_shared_with_me(collaborator.id)
        assert [n.id for n in shared] == [note.id]
        assert shared[0].access_level == "EDIT"

    async def test_unknown_group(self, sharing_service, note, owner):
        with pytest.raises(NotFoundError):
            await sharing_service.share_with_group(note.id, owner.id, uuid.uuid4())

    async def test_user_and_group_grants_are_distinct(
        self, sharing_service, note, owner, collaborator, team
    ):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id, SharePermission.VIEW)
        await sharing_service.share_with_group(note.id, owner.id, team.id, SharePermission.EDIT)

        shares = await sharing_service.list_shares(note.id, owner.id)
        assert {s.target_type for s in shares} == {"user", "group"}

        # the stronger of the two grants applies
        shared = await sharing_service.list_shared_with_me(collaborator.id)
        assert shared[0].access_level == "EDIT"


class TestRevoke:
    async def test_revoke_last_grant_clears_flag(
        self, sharing_service, note_service, note, owner, collaborator
    ):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id)

        assert await sharing_service.revoke_share(note.id, owner.id, user_id=collaborator.id) is True

        refreshed = await note_service.get_note(note.id, owner.id)
        assert refreshed.is_shared is False
        assert refreshed.shares == []
        with pytest.raises(ForbiddenError):
            await note_service.get_note(note.id, collaborator.id)

    async def test_revoke_keeps_flag_while_grants_remain(
        self, sharing_service, note_service, note, owner, collaborator, team
    ):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id)
        await sharing_service.share_with_group(note.id, owner.id, team.id)

        await sharing_service.revoke_share(note.id, owner.id, group_id=team.id)

        refreshed = await note_service.get_note(note.id, owner.id)
        assert refreshed.is_shared is True
        assert [s.target_type for s in refreshed.shares] == ["user"]

    async def test_revoke_without_grant_is_a_noop(self, sharing_service, note, owner, collaborator):
        assert await sharing_service.revoke_share(note.id, owner.id, user_id=collaborator.id) is False

    async def test_group_id_does_not_revoke_user_grant(
        self, sharing_service, note, owner, collaborator
    ):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id)

        assert await sharing_service.revoke_share(note.id, owner.id, group_id=collaborator.id) is False
        assert len(await sharing_service.list_shares(note.id, owner.id)) == 1

    @pytest.mark.parametrize("both", [True, False])
    async def test_target_must_be_exactly_one(self, sharing_service, note, owner, both):
        kwargs = {"user_id": uuid.uuid4(), "group_id": uuid.uuid4()} if both else {}
        with pytest.raises(ValidationError):
            await sharing_service.revoke_share(note.id, owner.id, **kwargs)


class TestUpdatePermission:
    async def test_changes_existing_grant(self, sharing_service, note, owner, collaborator):
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id, SharePermission.VIEW)

        share = await sharing_service.update_permission(
            note.id, owner.id, UserTarget(collaborator.id), SharePermission.EDIT
        )
        assert share.permission == SharePermission.EDIT

    async def test_missing_grant(self, sharing_service, note, owner, collaborator):
        with pytest.raises(NotFoundError):
            await sharing_service.update_permission(
                note.id, owner.id, UserTarget(collaborator.id), SharePermission.EDIT
            )


class TestSharedWithMe:
    async def test_excludes_own_and_deleted_notes(
        self, sharing_service, note_service, note, owner, collaborator
    ):
        mine = await note_service.create_note(collaborator.id, NoteCreate(title="Mine"))
        await sharing_service.share_with_user(note.id, owner.id, collaborator.id)

        shared = await sharing_service.list_shared_with_me(collaborator.id)
        assert [n.id for n in shared] == [note.id]
        assert mine.id not in [n.id for n in shared]
        assert shared[0].shares == []

        await note_service.delete_note(note.id, owner.id)
        assert await sharing_service.list_shared_with_me(collaborator.id) == []
