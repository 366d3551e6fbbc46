"""Initial schema: notes, shares, versions, comments, notifications

Revision ID: 4b1d2a7c9e10
Revises:
Create Date: 2025-10-02 09:12:31.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1d2a7c9e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.CheckConstraint('length(username) <= 50', name='ck_users_username_len'),
        sa.CheckConstraint('full_name IS NULL OR length(full_name) <= 100', name='ck_users_full_name_len'),
    )
    op.create_index('idx_users_username', 'users', ['username'])

    op.create_table(
        'groups',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('idx_groups_owner_id', 'groups', ['owner_id'])

    op.create_table(
        'group_members',
        *_base_columns(),
        sa.Column('group_id', sa.Uuid(), sa.ForeignKey('groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.String(length=10), nullable=False),
        sa.UniqueConstraint('group_id', 'user_id', name='uq_group_members_group_user'),
    )
    op.create_index('idx_group_members_user_id', 'group_members', ['user_id'])

    op.create_table(
        'tags',
        *_base_columns(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('name', 'owner_id', name='uq_tags_name_owner'),
        sa.CheckConstraint('length(name) <= 50', name='ck_tags_name_len'),
        sa.CheckConstraint('length(color) = 7', name='ck_tags_color_len'),
    )
    op.create_index('idx_tags_owner_id', 'tags', ['owner_id'])

    op.create_table(
        'notes',
        *_base_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_shared', sa.Boolean(), nullable=False),
        sa.Column('current_version', sa.Integer(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.CheckConstraint('length(title) <= 200', name='ck_notes_title_len'),
        sa.CheckConstraint('current_version >= 1', name='ck_notes_version_positive'),
    )
    op.create_index('idx_notes_owner_id', 'notes', ['owner_id'])
    op.create_index('idx_notes_created_at', 'notes', ['created_at'])
    op.create_index('idx_notes_owner_created', 'notes', ['owner_id', 'created_at'])
    op.create_index('idx_notes_owner_deleted', 'notes', ['owner_id', 'is_deleted'])

    op.create_table(
        'note_tags',
        *_base_columns(),
        sa.Column('note_id', sa.Uuid(), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tag_id', sa.Uuid(), sa.ForeignKey('tags.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('note_id', 'tag_id', name='uq_note_tags_note_tag'),
    )
    op.create_index('idx_note_tags_note_id', 'note_tags', ['note_id'])
    op.create_index('idx_note_tags_tag_id', 'note_tags', ['tag_id'])

    op.create_table(
        'shares',
        *_base_columns(),
        sa.Column('note_id', sa.Uuid(), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('target_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('target_group_id', sa.Uuid(), sa.ForeignKey('groups.id', ondelete='CASCADE'), nullable=True),
        sa.Column('permission', sa.String(length=10), nullable=False),
        sa.Column('shared_by_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.CheckConstraint(
            '(target_user_id IS NULL) <> (target_group_id IS NULL)', name='ck_shares_single_target'
        ),
        sa.UniqueConstraint('note_id', 'target_user_id', name='uq_shares_note_user'),
        sa.UniqueConstraint('note_id', 'target_group_id', name='uq_shares_note_group'),
    )
    op.create_index('idx_shares_note_id', 'shares', ['note_id'])
    op.create_index('idx_shares_target_user', 'shares', ['target_user_id'])
    op.create_index('idx_shares_target_group', 'shares', ['target_group_id'])

    op.create_table(
        'note_versions',
        *_base_columns(),
        sa.Column('note_id', sa.Uuid(), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('changed_by_user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('change_reason', sa.String(length=255), nullable=True),
    )
    op.create_index('idx_note_versions_note_number', 'note_versions', ['note_id', 'version_number'])

    op.create_table(
        'comments',
        *_base_columns(),
        sa.Column('note_id', sa.Uuid(), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
    )
    op.create_index('idx_comments_note_created', 'comments', ['note_id', 'created_at'])

    op.create_table(
        'notifications',
        *_base_columns(),
        sa.Column('recipient_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('actor_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('note_id', sa.Uuid(), sa.ForeignKey('notes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('group_id', sa.Uuid(), sa.ForeignKey('groups.id', ondelete='SET NULL'), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_notifications_recipient_status', 'notifications', ['recipient_id', 'status'])
    op.create_index('idx_notifications_created_at', 'notifications', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'notifications',
        'comments',
        'note_versions',
        'shares',
        'note_tags',
        'notes',
        'tags',
        'group_members',
        'groups',
        'users',
    ):
        op.drop_table(table)
