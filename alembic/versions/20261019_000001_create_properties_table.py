"""Create properties table

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

This migration creates the properties table holding listings.
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
    """Create the properties table."""
    op.create_table(
        'properties',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column(
            'property_type',
            sa.Enum('apartment', 'house', 'studio', 'office', name='property_type', create_constraint=True),
            nullable=False
        ),
        sa.Column('room_type', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('area', sa.Float(), nullable=False),
        sa.Column('floor', sa.Integer(), nullable=False),
        sa.Column('total_floors', sa.Integer(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('direction', sa.String(length=50), nullable=False),
        sa.Column('management_fee', sa.Float(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('contact_name', sa.String(length=100), nullable=False),
        sa.Column('contact_phone', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('price >= 0', name='ck_properties_price_non_negative'),
        sa.CheckConstraint('area >= 0', name='ck_properties_area_non_negative'),
    )

    # Create indexes for common queries
    op.create_index('ix_properties_created_at', 'properties', ['created_at'])
    op.create_index('ix_properties_is_available', 'properties', ['is_available'])
    op.create_index('ix_properties_property_type', 'properties', ['property_type'])


def downgrade() -> None:
    """Drop the properties table."""
    op.drop_index('ix_properties_property_type', table_name='properties')
    op.drop_index('ix_properties_is_available', table_name='properties')
    op.drop_index('ix_properties_created_at', table_name='properties')
    op.drop_table('properties')
