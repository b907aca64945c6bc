"""create users, stores and ratings tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role_enum = sa.Enum('admin', 'user', 'store_owner', name='userroleenum')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=60), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=400), nullable=False),
        sa.Column('role', user_role_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index('ix_users_email', ['email'], unique=True)
        batch_op.create_index('ix_users_role', ['role'])

    op.create_table('stores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(length=400), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('stores', schema=None) as batch_op:
        batch_op.create_index('ix_stores_name', ['name'])
        batch_op.create_index('ix_stores_email', ['email'], unique=True)
        batch_op.create_index('ix_stores_owner_id', ['owner_id'])

    op.create_table('ratings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        # one rating per user per store
        sa.UniqueConstraint('user_id', 'store_id', name='uix_user_store'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_rating_range')
    )
    with op.batch_alter_table('ratings', schema=None) as batch_op:
        batch_op.create_index('ix_ratings_user_id', ['user_id'])
        batch_op.create_index('ix_ratings_store_id', ['store_id'])


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('ratings', schema=None) as batch_op:
        batch_op.drop_index('ix_ratings_store_id')
        batch_op.drop_index('ix_ratings_user_id')
    op.drop_table('ratings')

    with op.batch_alter_table('stores', schema=None) as batch_op:
        batch_op.drop_index('ix_stores_owner_id')
        batch_op.drop_index('ix_stores_email')
        batch_op.drop_index('ix_stores_name')
    op.drop_table('stores')

    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index('ix_users_role')
        batch_op.drop_index('ix_users_email')
    op.drop_table('users')

    user_role_enum.drop(op.get_bind(), checkfirst=True)
