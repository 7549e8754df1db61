"""catalog schema: attributes, property types and ordered type scope

Revision ID: c001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "c001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Global attributes ---
    op.create_table(
        "attributes",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("data_type", sa.String(), nullable=False),
        sa.Column(
            "is_filterable", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_attributes_name_lower",
        "attributes",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "attribute_options",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("attribute_id", sa.String(), nullable=False),
        sa.Column("option_value", sa.String(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["attribute_id"], ["attributes.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "attribute_id", "option_value", name="uq_attribute_options_value"
        ),
    )
    op.create_index(
        "ix_attribute_options_attribute_id", "attribute_options", ["attribute_id"]
    )

    # --- Property types and their ordered scope ---
    op.create_table(
        "property_types",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_property_types_name_lower",
        "property_types",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "property_type_attributes",
        sa.Column("type_id", sa.String(), nullable=False),
        sa.Column("attribute_id", sa.String(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("type_id", "attribute_id"),
        sa.ForeignKeyConstraint(
            ["type_id"], ["property_types.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["attribute_id"], ["attributes.id"], ondelete="RESTRICT"
        ),
        sa.UniqueConstraint(
            "type_id", "sort_order", name="uq_type_attribute_sort_order"
        ),
        sa.CheckConstraint("sort_order >= 0", name="ck_type_attribute_sort_order"),
    )
    op.create_index(
        "ix_property_type_attributes_attribute_id",
        "property_type_attributes",
        ["attribute_id"],
    )

    # --- Listings and their typed attribute values ---
    op.create_table(
        "properties",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("type_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["type_id"], ["property_types.id"], ondelete="RESTRICT"
        ),
    )
    op.create_index("ix_properties_type_id", "properties", ["type_id"])

    op.create_table(
        "property_attribute_values",
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("attribute_id", sa.String(), nullable=False),
        sa.Column("value_kind", sa.String(), nullable=False),
        sa.Column("string_value", sa.Text(), nullable=True),
        sa.Column("integer_value", sa.BigInteger(), nullable=True),
        sa.Column("decimal_value", sa.Numeric(18, 4), nullable=True),
        sa.Column("boolean_value", sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint("property_id", "attribute_id"),
        sa.ForeignKeyConstraint(
            ["property_id"], ["properties.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["attribute_id"], ["attributes.id"], ondelete="RESTRICT"
        ),
    )
    op.create_index(
        "ix_property_attribute_values_attribute_id",
        "property_attribute_values",
        ["attribute_id"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_property_attribute_values_attribute_id", "property_attribute_values"
    )
    op.drop_table("property_attribute_values")

    op.drop_index("ix_properties_type_id", "properties")
    op.drop_table("properties")

    op.drop_index(
        "ix_property_type_attributes_attribute_id", "property_type_attributes"
    )
    op.drop_table("property_type_attributes")

    op.drop_index("uq_property_types_name_lower", "property_types")
    op.drop_table("property_types")

    op.drop_index("ix_attribute_options_attribute_id", "attribute_options")
    op.drop_table("attribute_options")

    op.drop_index("uq_attributes_name_lower", "attributes")
    op.drop_table("attributes")
