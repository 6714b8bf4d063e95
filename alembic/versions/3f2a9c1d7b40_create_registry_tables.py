"""create registry tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

THESIS_TYPES = (
    "Master",
    "Doctorate",
    "Specialization in Medicine",
    "Proficiency in Art",
)
SUPERVISOR_ROLES = ("Supervisor", "Co-Supervisor")


def _entity_columns() -> list[sa.Column]:
    """Surrogate key and timestamps shared by every entity table."""
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create entity, thesis and association tables."""
    op.create_table(
        "universities",
        *_entity_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_universities"),
    )
    op.create_index("ix_universities_name", "universities", ["name"])

    op.create_table(
        "institutes",
        *_entity_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("university_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["university_id"],
            ["universities.id"],
            name="fk_institutes_university_id",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_institutes"),
    )
    op.create_index("ix_institutes_name", "institutes", ["name"])
    op.create_index("ix_institutes_university_id", "institutes", ["university_id"])

    op.create_table(
        "people",
        *_entity_columns(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("affiliation", sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_people"),
        sa.UniqueConstraint("email", name="uq_people_email"),
    )
    op.create_index("ix_people_last_name", "people", ["last_name"])

    op.create_table(
        "subject_topics",
        *_entity_columns(),
        sa.Column("topic_name", sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_subject_topics"),
        sa.UniqueConstraint("topic_name", name="uq_subject_topics_topic_name"),
    )

    op.create_table(
        "keywords",
        *_entity_columns(),
        sa.Column("word", sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_keywords"),
        sa.UniqueConstraint("word", name="uq_keywords_word"),
    )

    op.create_table(
        "theses",
        *_entity_columns(),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("abstract", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                *THESIS_TYPES,
                name="thesistype",
                native_enum=False,
                length=50,
                create_constraint=False,
            ),
            nullable=False,
        ),
        sa.Column("university_id", sa.Integer(), nullable=False),
        sa.Column("institute_id", sa.Integer(), nullable=False),
        sa.Column("num_pages", sa.Integer(), nullable=False),
        sa.Column("language", sa.String(length=50), nullable=False),
        sa.Column("submission_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(
            ["author_id"], ["people.id"], name="fk_theses_author_id"
        ),
        sa.ForeignKeyConstraint(
            ["university_id"], ["universities.id"], name="fk_theses_university_id"
        ),
        sa.ForeignKeyConstraint(
            ["institute_id"], ["institutes.id"], name="fk_theses_institute_id"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_theses"),
    )
    for column in ("author_id", "year", "type", "university_id", "institute_id"):
        op.create_index(f"ix_theses_{column}", "theses", [column])
    op.create_index("ix_theses_language", "theses", ["language"])

    op.create_table(
        "supervisor_assignments",
        *_entity_columns(),
        sa.Column("thesis_id", sa.Integer(), nullable=False),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.Column(
            "role",
            sa.Enum(
                *SUPERVISOR_ROLES,
                name="supervisorrole",
                native_enum=False,
                length=20,
                create_constraint=False,
            ),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["thesis_id"],
            ["theses.id"],
            name="fk_supervisor_assignments_thesis_id",
        ),
        sa.ForeignKeyConstraint(
            ["person_id"],
            ["people.id"],
            name="fk_supervisor_assignments_person_id",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_supervisor_assignments"),
        sa.UniqueConstraint(
            "thesis_id", "person_id", "role", name="uq_supervisor_assignment"
        ),
    )
    op.create_index(
        "ix_supervisor_assignments_thesis_id", "supervisor_assignments", ["thesis_id"]
    )
    op.create_index(
        "ix_supervisor_assignments_person_id", "supervisor_assignments", ["person_id"]
    )

    op.create_table(
        "thesis_subject_topics",
        sa.Column("thesis_id", sa.Integer(), nullable=False),
        sa.Column("topic_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["thesis_id"], ["theses.id"], name="fk_thesis_subject_topics_thesis_id"
        ),
        sa.ForeignKeyConstraint(
            ["topic_id"],
            ["subject_topics.id"],
            name="fk_thesis_subject_topics_topic_id",
        ),
        sa.PrimaryKeyConstraint(
            "thesis_id", "topic_id", name="pk_thesis_subject_topics"
        ),
    )
    op.create_index(
        "ix_thesis_subject_topics_topic_id", "thesis_subject_topics", ["topic_id"]
    )

    op.create_table(
        "thesis_keywords",
        sa.Column("thesis_id", sa.Integer(), nullable=False),
        sa.Column("keyword_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["thesis_id"], ["theses.id"], name="fk_thesis_keywords_thesis_id"
        ),
        sa.ForeignKeyConstraint(
            ["keyword_id"], ["keywords.id"], name="fk_thesis_keywords_keyword_id"
        ),
        sa.PrimaryKeyConstraint("thesis_id", "keyword_id", name="pk_thesis_keywords"),
    )
    op.create_index("ix_thesis_keywords_keyword_id", "thesis_keywords", ["keyword_id"])


def downgrade() -> None:
    """Drop every registry table, children first."""
    op.drop_table("thesis_keywords")
    op.drop_table("thesis_subject_topics")
    op.drop_table("supervisor_assignments")
    op.drop_table("theses")
    op.drop_table("keywords")
    op.drop_table("subject_topics")
    op.drop_table("people")
    op.drop_table("institutes")
    op.drop_table("universities")
