"""Create posts table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `posts` table backing PostRepository.
How:   Portable column types (TEXT, JSON, TIMESTAMP WITH TIME ZONE) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table (all posts are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the posts table and its created_at index. See postboard/models/post.py."""
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.String(24),
            nullable=False,
            comment="24-character hex identifier, assigned once at creation",
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "tags",
            sa.JSON(),
            nullable=False,
            comment="Ordered list of tag strings",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this post was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # List returns posts in creation order
    op.create_index("idx_posts_created_at", "posts", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
