"""Create admins, properties and enquiries tables

Revision ID: 3c1d9a7e52b4
Revises: 
Create Date: 2026-10-19 10:12:44.918204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1d9a7e52b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create admins table
    op.create_table('admins',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_admins_email', 'admins', ['email'], unique=True)

    # Create properties table
    op.create_table('properties',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('bhk', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Integer(), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('area', sa.String(length=100), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('video', sa.JSON(), nullable=True),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create indexes for properties
    op.create_index('idx_properties_city', 'properties', ['city'], unique=False)
    op.create_index('idx_properties_city_price', 'properties', ['city', 'price'], unique=False)
    op.create_index('idx_properties_created_at', 'properties', ['created_at'], unique=False)

    # Create enquiries table
    op.create_table('enquiries',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=10), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('property_id', sa.String(length=36), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create indexes for enquiries
    op.create_index('idx_enquiries_property_created', 'enquiries', ['property_id', 'created_at'], unique=False)
    op.create_index('idx_enquiries_status', 'enquiries', ['status'], unique=False)


def downgrade() -> None:
    # Drop enquiries
    op.drop_index('idx_enquiries_status', table_name='enquiries')
    op.drop_index('idx_enquiries_property_created', table_name='enquiries')
    op.drop_table('enquiries')

    # Drop properties
    op.drop_index('idx_properties_created_at', table_name='properties')
    op.drop_index('idx_properties_city_price', table_name='properties')
    op.drop_index('idx_properties_city', table_name='properties')
    op.drop_table('properties')

    # Drop admins
    op.drop_index('idx_admins_email', table_name='admins')
    op.drop_table('admins')
