"""create users, typing_scores, speed_scores

Revision ID: 5b1e2c9d7a31
Revises:
Create Date: 2026-10-19 12:30:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5b1e2c9d7a31'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'typing_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('words', sa.Integer(), nullable=False),
        sa.Column('words_per_minute', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_typing_scores_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_typing_scores'),
    )
    op.create_index('ix_typing_scores_user_id', 'typing_scores', ['user_id'])

    op.create_table(
        'speed_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('clicks', sa.Integer(), nullable=False),
        sa.Column('clicks_per_second', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_speed_scores_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_speed_scores'),
    )
    op.create_index('ix_speed_scores_user_id', 'speed_scores', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_speed_scores_user_id', table_name='speed_scores')
    op.drop_table('speed_scores')
    op.drop_index('ix_typing_scores_user_id', table_name='typing_scores')
    op.drop_table('typing_scores')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
