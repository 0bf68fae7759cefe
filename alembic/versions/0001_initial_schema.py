"""professors, courses, user auths and reviews

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

from courseprofs.config import settings

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

course_type = sa.Enum("compulsory", "elective", "laboratory", name="course_type")


def upgrade() -> None:
    op.create_table(
        "professors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=150), nullable=False),
        sa.Column("mail", sa.String(length=255)),
        sa.Column("phone", sa.String(length=30)),
        sa.Column("office", sa.String(length=100)),
        sa.Column("e_office", sa.String(length=255)),
        sa.Column("average_rating", sa.Float(), server_default="-1.0", nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index("ix_professors_id", "professors", ["id"])
    op.create_index("ix_professors_average_rating", "professors", ["average_rating"])

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", course_type, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index("ix_courses_id", "courses", ["id"])

    op.create_table(
        "user_auths",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("apps_id", sa.BigInteger(), nullable=False),
        sa.Column("token_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index("ix_user_auths_id", "user_auths", ["id"])
    op.create_index("ix_user_auths_apps_id", "user_auths", ["apps_id"], unique=True)

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("professor_id", sa.Integer(), sa.ForeignKey("professors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_auth_id", sa.Integer(), sa.ForeignKey("user_auths.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("users_subject_score", sa.Float()),
        sa.Column("comments", sa.Text()),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.CheckConstraint(
            f"rating >= {settings.MIN_RATING} AND rating <= {settings.MAX_RATING}",
            name="check_rating_range",
        ),
        sa.UniqueConstraint("user_auth_id", "professor_id", "course_id", name="uq_review_author_professor_course"),
    )
    op.create_index("ix_reviews_id", "reviews", ["id"])
    op.create_index("ix_reviews_professor_id", "reviews", ["professor_id"])
    op.create_index("ix_reviews_course_id", "reviews", ["course_id"])
    op.create_index("ix_reviews_user_auth_id", "reviews", ["user_auth_id"])


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("user_auths")
    op.drop_table("courses")
    op.drop_table("professors")
    course_type.drop(op.get_bind(), checkfirst=True)
