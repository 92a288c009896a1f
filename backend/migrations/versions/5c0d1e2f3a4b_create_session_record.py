"""create session_record key-value table

Revision ID: 5c0d1e2f3a4b
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c0d1e2f3a4b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # Tables created by `flask db-reset` already match this revision
    if 'session_record' in set(insp.get_table_names()):
        return
    op.create_table(
        'session_record',
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.Float(), nullable=False),
        sa.Column('updated_at', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )
    with op.batch_alter_table('session_record') as batch_op:
        batch_op.create_index(batch_op.f('ix_session_record_expires_at'), ['expires_at'], unique=False)


def downgrade():
    with op.batch_alter_table('session_record') as batch_op:
        batch_op.drop_index(batch_op.f('ix_session_record_expires_at'))
    op.drop_table('session_record')
