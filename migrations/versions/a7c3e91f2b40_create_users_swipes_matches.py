"""create_users_swipes_matches

Revision ID: a7c3e91f2b40
Revises:
Create Date: 2026-10-18 10:12:44.381205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7c3e91f2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # One swipe per ordered (swiper, target) pair
    op.create_table(
        'swipes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('swiper_id', sa.Integer(), nullable=False),
        sa.Column('target_id', sa.Integer(), nullable=False),
        sa.Column('liked', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['swiper_id'], ['users.id']),
        sa.ForeignKeyConstraint(['target_id'], ['users.id']),
        sa.UniqueConstraint('swiper_id', 'target_id', name='uq_swipe_swiper_target'),
        sa.CheckConstraint('swiper_id <> target_id', name='ck_swipe_not_self'),
    )
    op.create_index('ix_swipes_id', 'swipes', ['id'])
    op.create_index('ix_swipes_swiper_id', 'swipes', ['swiper_id'])
    op.create_index('ix_swipes_target_id', 'swipes', ['target_id'])

    # One match per unordered pair: canonical order + unique pair
    op.create_table(
        'matches',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user1_id', sa.Integer(), nullable=False),
        sa.Column('user2_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user1_id'], ['users.id']),
        sa.ForeignKeyConstraint(['user2_id'], ['users.id']),
        sa.UniqueConstraint('user1_id', 'user2_id', name='uq_match_user1_user2'),
        sa.CheckConstraint('user1_id < user2_id', name='ck_match_canonical_order'),
    )
    op.create_index('ix_matches_id', 'matches', ['id'])
    op.create_index('ix_matches_user1_id', 'matches', ['user1_id'])
    op.create_index('ix_matches_user2_id', 'matches', ['user2_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_matches_user2_id', 'matches')
    op.drop_index('ix_matches_user1_id', 'matches')
    op.drop_index('ix_matches_id', 'matches')
    op.drop_table('matches')

    op.drop_index('ix_swipes_target_id', 'swipes')
    op.drop_index('ix_swipes_swiper_id', 'swipes')
    op.drop_index('ix_swipes_id', 'swipes')
    op.drop_table('swipes')

    op.drop_index('ix_users_email', 'users')
    op.drop_index('ix_users_id', 'users')
    op.drop_table('users')
