"""Create referral wallet tables

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users with referral counters and wallet
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('mobile_number', sa.String(length=15), nullable=False),
        sa.Column('referral_code', sa.String(length=50), nullable=False),
        sa.Column('referred_by_code', sa.String(length=50), nullable=True),
        sa.Column(
            'referral_count', sa.Integer(),
            nullable=False, server_default='0'
        ),
        sa.Column(
            'referral_count_at_last_redeem', sa.Integer(),
            nullable=False, server_default='0',
            comment='Snapshot of referral_count at the latest redemption'
        ),
        sa.Column(
            'wallet_balance', sa.Integer(),
            nullable=False, server_default='0'
        ),
        sa.Column('reward', sa.String(length=255), nullable=True),
        sa.Column(
            'payment_status', sa.String(length=20),
            nullable=False, server_default='PENDING'
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'wallet_balance >= 0',
            name='check_user_wallet_balance_non_negative'
        ),
        sa.CheckConstraint(
            'referral_count >= 0',
            name='check_user_referral_count_non_negative'
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('mobile_number'),
    )
    op.create_index(
        'ix_users_referral_code', 'users', ['referral_code'], unique=True
    )
    op.create_index(
        'ix_users_referred_by_code', 'users',
        ['referred_by_code'], unique=False
    )

    # One bank profile per user, removed with the user
    op.create_table(
        'user_bank_details',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('account_number', sa.String(length=50), nullable=False),
        sa.Column('ifsc_code', sa.String(length=20), nullable=False),
        sa.Column('bank_name', sa.String(length=255), nullable=False),
        sa.Column(
            'account_holder_name', sa.String(length=255), nullable=False
        ),
        sa.Column(
            'redeem_amount', sa.Integer(),
            nullable=False, server_default='0'
        ),
        sa.Column(
            'redeem_status', sa.String(length=20),
            nullable=False, server_default='processing'
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_user_bank_details_user_id', 'user_bank_details',
        ['user_id'], unique=True
    )

    # Redeem history: no foreign key, the ledger outlives the user
    op.create_table(
        'redeem_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('redeem_amount', sa.Integer(), nullable=False),
        sa.Column(
            'status', sa.String(length=20),
            nullable=False, server_default='processing'
        ),
        sa.Column('bank_details', sa.Text(), nullable=True),
        sa.Column('redeemed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deposited_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_redeem_history_user_id', 'redeem_history',
        ['user_id'], unique=False
    )
    op.create_index(
        'idx_redeem_history_user_status', 'redeem_history',
        ['user_id', 'status'], unique=False
    )

    op.create_table(
        'payouts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('payout_id', sa.String(length=50), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('method', sa.String(length=50), nullable=False),
        sa.Column(
            'status', sa.String(length=20),
            nullable=False, server_default='pending'
        ),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('bank_details', sa.Text(), nullable=False),
        sa.Column('transaction_id', sa.String(length=100), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payout_id'),
    )
    op.create_index(
        'ix_payouts_user_id', 'payouts', ['user_id'], unique=False
    )

    op.create_table(
        'reward_targets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('referral_count', sa.Integer(), nullable=False),
        sa.Column('reward', sa.String(length=255), nullable=False),
        sa.Column('target', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'referral_count > 0', name='check_reward_target_count_positive'
        ),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('reward_targets')
    op.drop_index('ix_payouts_user_id', table_name='payouts')
    op.drop_table('payouts')
    op.drop_index(
        'idx_redeem_history_user_status', table_name='redeem_history'
    )
    op.drop_index('ix_redeem_history_user_id', table_name='redeem_history')
    op.drop_table('redeem_history')
    op.drop_index(
        'ix_user_bank_details_user_id', table_name='user_bank_details'
    )
    op.drop_table('user_bank_details')
    op.drop_index('ix_users_referred_by_code', table_name='users')
    op.drop_index('ix_users_referral_code', table_name='users')
    op.drop_table('users')
