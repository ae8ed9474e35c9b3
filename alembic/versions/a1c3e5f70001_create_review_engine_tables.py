"""create review engine tables

Revision ID: a1c3e5f70001
Revises: 
Create Date: 2026-10-19 09:12:44.120311
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# ENUM definitions (names match the model Enum(name=...) arguments)
role_name = sa.Enum('REVIEWEE', 'REVIEWER', 'ADMIN', name='role_name')
submission_type = sa.Enum('TEXT_MSG', 'DATING_PROFILE', name='submission_type')
submission_status = sa.Enum('PENDING', 'IN_REVIEW', 'PUBLISHED', 'REJECTED', name='submission_status')
flag_category = sa.Enum('inappropriate', 'needs_more_context', 'skip', name='flag_category')
notification_type = sa.Enum('info', 'alert', name='notification_type')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('username', sa.String(50), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Integer, primary_key=True, index=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('role', role_name, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_role'),
    )

    op.create_table(
        'submissions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('type', submission_type, nullable=False),
        sa.Column('additional_info', sa.Text, nullable=False),
        sa.Column('image_urls', sa.JSON, nullable=False),
        sa.Column('status', submission_status, nullable=False, server_default='PENDING'),
        sa.Column('review_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('inappropriate_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('needs_context_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_submissions_created_at_id', 'submissions', ['created_at', 'id'])

    op.create_table(
        'reviewer_interactions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('submission_id', sa.Uuid(as_uuid=True), sa.ForeignKey('submissions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('reviewer_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('seen', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('review', sa.Text, nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('flag', flag_category, nullable=True),
        sa.Column('flagged_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('submission_id', 'reviewer_id', name='uq_interaction_submission_reviewer'),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer, primary_key=True, nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('type', notification_type, nullable=False, server_default='info'),
        sa.Column('read_status', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('link', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('notifications')
    op.drop_table('reviewer_interactions')
    op.drop_index('ix_submissions_created_at_id', table_name='submissions')
    op.drop_table('submissions')
    op.drop_table('user_roles')
    op.drop_table('users')

    bind = op.get_bind()
    for e in (notification_type, flag_category, submission_status, submission_type, role_name):
        e.drop(bind=bind, checkfirst=True)
