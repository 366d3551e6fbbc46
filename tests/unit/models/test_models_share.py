"""Unit tests for the Share model and its target variants."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from notecollab.core.models import GroupTarget, Note, Share, SharePermission, UserTarget


class TestShareTarget:
    def test_for_user_target(self):
        user_id, sharer = uuid.uuid4(), uuid.uuid4()
        share = Share.for_target(UserTarget(user_id), SharePermission.EDIT, sharer)

        assert share.target_user_id == user_id
        assert share.target_group_id is None
        assert share.target == UserTarget(user_id)
        assert share.permission == SharePermission.EDIT
        assert share.shared_by_user_id == sharer

    def test_for_group_target(self):
        group_id = uuid.uuid4()
        share = Share.for_target(GroupTarget(group_id), SharePermission.VIEW, uuid.uuid4())

        assert share.target_user_id is None
        assert share.target == GroupTarget(group_id)

    def test_matches_distinguishes_user_and_group_with_same_id(self):
        same_id = uuid.uuid4()
        share = Share.for_target(UserTarget(same_id), SharePermission.VIEW, uuid.uuid4())

        assert share.matches(UserTarget(same_id))
        assert not share.matches(GroupTarget(same_id))


class TestSharePersistence:
    @pytest.mark.asyncio
    async def test_share_with_both_targets_is_rejected(self, test_session, owner, collaborator, team):
        note = Note(title="Plan", content="", owner_id=owner.id)
        test_session.add(note)
        await test_session.commit()

        test_session.add(
            Share(
                note_id=note.id,
                target_user_id=collaborator.id,
                target_group_id=team.id,
                permission=SharePermission.VIEW,
                shared_by_user_id=owner.id,
            )
        )
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    @pytest.mark.asyncio
    async def test_one_grant_per_note_and_user(self, test_session, owner, collaborator):
        note = Note(title="Plan", content="", owner_id=owner.id)
        test_session.add(note)
        await test_session.commit()

        for permission in (SharePermission.VIEW, SharePermission.EDIT):
            test_session.add(
                Share(
                    note_id=note.id,
                    target_user_id=collaborator.id,
                    permission=permission,
                    shared_by_user_id=owner.id,
                )
            )
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    @pytest.mark.asyncio
    async def test_sync_shared_flag_follows_grants(self, test_session, owner, collaborator):
        note = Note(title="Plan", content="", owner_id=owner.id)
        test_session.add(note)
        await test_session.commit()
        assert note.is_shared is False

        share = Share.for_target(UserTarget(collaborator.id), SharePermission.VIEW, owner.id)
        note.shares.append(share)
        note.sync_shared_flag()
        await test_session.commit()
        assert note.is_shared is True

        note.shares.remove(share)
        note.sync_shared_flag()
        await test_session.commit()
        assert note.is_shared is False
