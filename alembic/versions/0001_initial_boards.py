"""initial board / view / card / page / member tables

Revision ID: 0001_initial_boards
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial_boards"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "board",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("root_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("card_properties", sa.JSON(), nullable=True),
        sa.Column("column_calculations", sa.JSON(), nullable=True),
        sa.Column("view_ids", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_board_root_id", "board", ["root_id"])

    op.create_table(
        "board_view",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("board_id", sa.String(), sa.ForeignKey("board.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("view_type", sa.String(length=20), nullable=True),
        sa.Column("card_order", sa.JSON(), nullable=True),
        sa.Column("filter", sa.JSON(), nullable=True),
        sa.Column("sort_options", sa.JSON(), nullable=True),
        sa.Column("group_by_id", sa.String(), nullable=True),
        sa.Column("visible_option_ids", sa.JSON(), nullable=True),
        sa.Column("hidden_option_ids", sa.JSON(), nullable=True),
        sa.Column("date_display_property_id", sa.String(), nullable=True),
        sa.Column("linked_source_id", sa.String(), nullable=True),
        sa.Column("source_type", sa.String(length=50), nullable=True),
        sa.Column("source_data", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_board_view_board_id", "board_view", ["board_id"])

    op.create_table(
        "card",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("parent_id", sa.String(), nullable=False),
        sa.Column("root_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("properties", sa.JSON(), nullable=True),
        sa.Column("content_order", sa.JSON(), nullable=True),
        sa.Column("is_template", sa.Boolean(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("updated_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_card_parent_id_is_template", "card", ["parent_id", "is_template"])

    op.create_table(
        "page",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "member",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("username", sa.String(length=255), nullable=False),
    )


def downgrade():
    op.drop_table("member")
    op.drop_table("page")
    op.drop_index("ix_card_parent_id_is_template", table_name="card")
    op.drop_table("card")
    op.drop_index("ix_board_view_board_id", table_name="board_view")
    op.drop_table("board_view")
    op.drop_index("ix_board_root_id", table_name="board")
    op.drop_table("board")
