"""create commission engine tables

Revision ID: create_commission_engine_tables
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_commission_engine_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('commission_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=50), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
    )

    op.create_table('affiliate_commission',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('affiliate_id', sa.String(length=64), nullable=False),
        sa.Column('referral_id', sa.String(length=64), nullable=False),
        sa.Column('partner_tier', sa.String(length=20), nullable=True),
        sa.Column('base_amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('commission_rate', sa.Float(), nullable=False),
        sa.Column('commission_type', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('commission_metadata', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_affiliate_commission_affiliate_id', 'affiliate_commission', ['affiliate_id'])

    op.create_table('agent',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('can_create_sub_agent', sa.Boolean(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('sub_agent',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('parent_agent_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['parent_agent_id'], ['agent.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('agent_commission',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('sub_agent_id', sa.Integer(), nullable=False),
        sa.Column('transaction_amount', sa.Float(), nullable=False),
        sa.Column('base_rate', sa.Float(), nullable=False),
        sa.Column('parent_share', sa.Float(), nullable=False),
        sa.Column('total_commission', sa.Float(), nullable=False),
        sa.Column('parent_portion', sa.Float(), nullable=False),
        sa.Column('sub_agent_portion', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['agent_id'], ['agent.id']),
        sa.ForeignKeyConstraint(['sub_agent_id'], ['sub_agent.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('review',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('partner_id', sa.String(length=64), nullable=False),
        sa.Column('customer_id', sa.String(length=64), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('reply', sa.Text(), nullable=True),
        sa.Column('replied_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_review_partner_id', 'review', ['partner_id'])

    op.create_table('bureau',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('president_email', sa.String(length=120), nullable=False),
        sa.Column('city', sa.String(length=120), nullable=True),
        sa.Column('token', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('president_email'),
        sa.UniqueConstraint('token')
    )
    op.create_table('worker',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('bureau_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('access_level', sa.String(length=20), nullable=False),
        sa.Column('token', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['bureau_id'], ['bureau.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('bureau_id', 'email', name='uq_worker_bureau_email'),
        sa.UniqueConstraint('token')
    )
    op.create_index('ix_worker_bureau_id', 'worker', ['bureau_id'])
    op.create_index('ix_worker_email', 'worker', ['email'])

    # Insert default settings
    op.execute("""
        INSERT INTO commission_settings (key, value, description, created_at, updated_at)
        VALUES
        ('standard_rate', 0.05, 'Recommended commission rate for standard partners', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP),
        ('vip_rate', 0.08, 'Recommended commission rate for VIP (premium) partners', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP),
        ('top_rate', 0.12, 'Recommended commission rate for TOP partners', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP),
        ('base_user_commission', 0.20, 'Commission rate applied to transactions of agent users', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP),
        ('parent_share_ratio', 0.50, 'Share of an agent user commission paid to the parent agent', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    """)


def downgrade():
    op.drop_index('ix_worker_email', table_name='worker')
    op.drop_index('ix_worker_bureau_id', table_name='worker')
    op.drop_table('worker')
    op.drop_table('bureau')
    op.drop_index('ix_review_partner_id', table_name='review')
    op.drop_table('review')
    op.drop_table('agent_commission')
    op.drop_table('sub_agent')
    op.drop_table('agent')
    op.drop_index('ix_affiliate_commission_affiliate_id', table_name='affiliate_commission')
    op.drop_table('affiliate_commission')
    op.drop_table('commission_settings')
