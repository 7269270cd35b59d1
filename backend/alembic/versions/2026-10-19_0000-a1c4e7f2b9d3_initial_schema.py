"""initial_schema_users_preferences_channels_subscriptions_summaries

Revision ID: a1c4e7f2b9d3
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f2b9d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  comment='Timestamp when record was created (UTC)'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  comment='Timestamp when record was last updated (UTC)'),
    ]


def upgrade() -> None:
    """
    Create the initial schema.

    Tables:
    1. users - identity provider accounts
    2. user_notification_preferences - one per user
    3. youtube_channels - shared channels, unique channel_id
    4. user_channel_subscriptions - unique (user_id, channel_id)
    5. video_summaries - unique (user_id, video_id)

    Every child table references users with ON DELETE CASCADE.
    """

    # ================================
    # users
    # ================================
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), nullable=False,
                  comment='Identity provider user id (JWT sub claim)'),
        sa.Column('email', sa.String(length=255), nullable=False,
                  comment='Account email from the identity provider'),
        sa.Column('name', sa.String(length=255), nullable=True, comment='Display name'),
        sa.Column('image', sa.String(length=500), nullable=True, comment='Avatar URL'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    # ================================
    # user_notification_preferences
    # ================================
    op.create_table(
        'user_notification_preferences',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False,
                  comment='Auto-incrementing primary key'),
        sa.Column('user_id', sa.String(length=255), nullable=False,
                  comment='Owner of this preference (one per user)'),
        sa.Column('channel_type', sa.String(length=20), nullable=False,
                  comment='Delivery channel: email or whatsapp'),
        sa.Column('destination', sa.String(length=255), nullable=False,
                  comment='Email address or WhatsApp number, format depends on channel_type'),
        sa.Column('enabled', sa.Boolean(), nullable=False, comment='Whether notifications are sent'),
        sa.Column('categories', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
                  nullable=False, comment='Selected content categories'),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_user_notification_preferences_user_id_users'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_notification_preferences')),
        sa.UniqueConstraint('user_id', name=op.f('uq_user_notification_preferences_user_id')),
    )

    # ================================
    # youtube_channels
    # ================================
    op.create_table(
        'youtube_channels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False,
                  comment='Auto-incrementing primary key'),
        sa.Column('channel_id', sa.String(length=100), nullable=False,
                  comment='External YouTube channel identifier'),
        sa.Column('name', sa.String(length=255), nullable=False, comment='Channel display name'),
        sa.Column('url', sa.String(length=500), nullable=False,
                  comment='Channel URL as submitted by the first subscriber'),
        sa.Column('thumbnail_url', sa.String(length=500), nullable=True, comment='Channel avatar URL'),
        sa.Column('description', sa.Text(), nullable=True, comment='Channel description'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_youtube_channels')),
        sa.UniqueConstraint('channel_id', name=op.f('uq_youtube_channels_channel_id')),
    )

    # ================================
    # user_channel_subscriptions
    # ================================
    op.create_table(
        'user_channel_subscriptions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False,
                  comment='Auto-incrementing primary key'),
        sa.Column('user_id', sa.String(length=255), nullable=False, comment='Subscribing user'),
        sa.Column('channel_id', sa.Integer(), nullable=False, comment='Internal channel id'),
        sa.Column('subscribed_at', sa.DateTime(timezone=True), nullable=False,
                  comment='When the user subscribed (UTC)'),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_user_channel_subscriptions_user_id_users'),
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['channel_id'], ['youtube_channels.id'],
            name=op.f('fk_user_channel_subscriptions_channel_id_youtube_channels'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_channel_subscriptions')),
        sa.UniqueConstraint('user_id', 'channel_id', name='uq_user_channel_subscription'),
    )
    op.create_index(
        op.f('ix_user_channel_subscriptions_user_id'),
        'user_channel_subscriptions',
        ['user_id'],
        unique=False,
    )

    # ================================
    # video_summaries
    # ================================
    op.create_table(
        'video_summaries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False,
                  comment='Auto-incrementing primary key'),
        sa.Column('user_id', sa.String(length=255), nullable=False, comment='Owner of the summary'),
        sa.Column('channel_id', sa.Integer(), nullable=False, comment='Internal channel id'),
        sa.Column('video_id', sa.String(length=100), nullable=False, comment='External YouTube video id'),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Video title'),
        sa.Column('url', sa.String(length=500), nullable=False, comment='Video URL'),
        sa.Column('thumbnail_url', sa.String(length=500), nullable=True, comment='Video thumbnail URL'),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=False,
                  comment='When the video was published on YouTube (UTC)'),
        sa.Column('summary_content', sa.Text(), nullable=False,
                  comment='Summary text as produced by the summarizer'),
        sa.Column('is_read', sa.Boolean(), nullable=False,
                  comment='Whether the owner has marked the summary as read'),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_video_summaries_user_id_users'),
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['channel_id'], ['youtube_channels.id'],
            name=op.f('fk_video_summaries_channel_id_youtube_channels'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_video_summaries')),
        sa.UniqueConstraint('user_id', 'video_id', name='uq_user_video_summary'),
    )
    op.create_index(
        'ix_video_summaries_user_channel_published',
        'video_summaries',
        ['user_id', 'channel_id', 'published_at'],
        unique=False,
    )


def downgrade() -> None:
    """Drop every table created in upgrade(), children first."""
    op.drop_index('ix_video_summaries_user_channel_published', table_name='video_summaries')
    op.drop_table('video_summaries')

    op.drop_index(op.f('ix_user_channel_subscriptions_user_id'), table_name='user_channel_subscriptions')
    op.drop_table('user_channel_subscriptions')

    op.drop_table('youtube_channels')
    op.drop_table('user_notification_preferences')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
