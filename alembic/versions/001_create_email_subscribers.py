"""create email subscribers table

Revision ID: 001_create_email_subscribers
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_create_email_subscribers"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    connection = op.get_bind()
    inspector = sa.inspect(connection)

    if 'email_subscribers' not in inspector.get_table_names():
        op.create_table(
            'email_subscribers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(255), nullable=False),
            sa.Column('first_name', sa.String(100), nullable=True),
            sa.Column('last_name', sa.String(100), nullable=True),
            sa.Column('source', sa.String(32), nullable=False, server_default='subscribe'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('email', name='uq_email_subscribers_email'),
        )

        op.create_index(op.f('ix_email_subscribers_id'), 'email_subscribers', ['id'], unique=False)
        op.create_index(op.f('ix_email_subscribers_source'), 'email_subscribers', ['source'], unique=False)
        op.create_index(op.f('ix_email_subscribers_created_at'), 'email_subscribers', ['created_at'], unique=False)


def downgrade():
    connection = op.get_bind()
    inspector = sa.inspect(connection)

    if 'email_subscribers' in inspector.get_table_names():
        op.drop_index(op.f('ix_email_subscribers_created_at'), table_name='email_subscribers')
        op.drop_index(op.f('ix_email_subscribers_source'), table_name='email_subscribers')
        op.drop_index(op.f('ix_email_subscribers_id'), table_name='email_subscribers')
        op.drop_table('email_subscribers')
