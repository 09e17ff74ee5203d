"""Initial allocation schema

Revision ID: 4f2a9c61d0b3
Revises:
Create Date: 2026-10-19 09:12:41.518203

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c61d0b3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create regions table
    op.create_table(
        "regions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create companies table
    op.create_table(
        "companies",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("region_id", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_companies_name", "companies", ["name"])
    op.create_index("ix_companies_region_id", "companies", ["region_id"])

    # Create consultants table
    op.create_table(
        "consultants",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("region_id", sa.UUID(), nullable=True),
        sa.Column(
            "role",
            sa.String(length=50),
            nullable=False,
            server_default="CONSULTANT",
        ),
        sa.Column(
            "status", sa.String(length=20), nullable=False, server_default="ACTIVE"
        ),
        sa.Column("availability", sa.String(length=20), nullable=True),
        sa.Column("current_jobs", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_jobs", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint(
            "current_jobs >= 0", name="ck_consultant_current_jobs_non_negative"
        ),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_consultants_email", "consultants", ["email"])
    op.create_index("ix_consultants_region_id", "consultants", ["region_id"])
    op.create_index("ix_consultants_status", "consultants", ["status"])
    op.create_index(
        "idx_consultant_region_status_load",
        "consultants",
        ["region_id", "status", "current_jobs"],
    )

    # Create consultant tag tables
    op.create_table(
        "consultant_industries",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("consultant_id", sa.UUID(), nullable=False),
        sa.Column("industry", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_consultant_industries_consultant_id",
        "consultant_industries",
        ["consultant_id"],
    )
    op.create_index(
        "ix_consultant_industries_industry", "consultant_industries", ["industry"]
    )
    op.create_index(
        "idx_consultant_industry_unique",
        "consultant_industries",
        ["consultant_id", "industry"],
        unique=True,
    )

    op.create_table(
        "consultant_languages",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("consultant_id", sa.UUID(), nullable=False),
        sa.Column("language", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_consultant_languages_consultant_id",
        "consultant_languages",
        ["consultant_id"],
    )
    op.create_index(
        "ix_consultant_languages_language", "consultant_languages", ["language"]
    )
    op.create_index(
        "idx_consultant_language_unique",
        "consultant_languages",
        ["consultant_id", "language"],
        unique=True,
    )

    # Create jobs table
    op.create_table(
        "jobs",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("job_code", sa.String(length=50), nullable=True),
        sa.Column("company_id", sa.UUID(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="OPEN"),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("region_id", sa.UUID(), nullable=True),
        sa.Column("assigned_consultant_id", sa.UUID(), nullable=True),
        sa.Column("assignment_source", sa.String(length=50), nullable=True),
        sa.Column("assignment_mode", sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"]),
        sa.ForeignKeyConstraint(["region_id"], ["regions.id"]),
        sa.ForeignKeyConstraint(["assigned_consultant_id"], ["consultants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_jobs_job_code", "jobs", ["job_code"])
    op.create_index("ix_jobs_company_id", "jobs", ["company_id"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_region_id", "jobs", ["region_id"])
    op.create_index(
        "ix_jobs_assigned_consultant_id", "jobs", ["assigned_consultant_id"]
    )
    op.create_index(
        "idx_job_status_assigned", "jobs", ["status", "assigned_consultant_id"]
    )
    op.create_index("idx_job_status_region", "jobs", ["status", "region_id"])

    # Create assignment history table
    op.create_table(
        "consultant_job_assignments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("job_id", sa.UUID(), nullable=False),
        sa.Column("consultant_id", sa.UUID(), nullable=False),
        sa.Column(
            "status", sa.String(length=20), nullable=False, server_default="ACTIVE"
        ),
        sa.Column("assigned_by", sa.String(length=255), nullable=False),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("assignment_source", sa.String(length=50), nullable=True),
        sa.Column(
            "pipeline_stage",
            sa.String(length=20),
            nullable=False,
            server_default="SOURCING",
        ),
        sa.Column(
            "pipeline_progress", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("pipeline_note", sa.Text(), nullable=True),
        sa.Column("pipeline_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("pipeline_updated_by", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"]),
        sa.ForeignKeyConstraint(["consultant_id"], ["consultants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_consultant_job_assignments_job_id",
        "consultant_job_assignments",
        ["job_id"],
    )
    op.create_index(
        "ix_consultant_job_assignments_consultant_id",
        "consultant_job_assignments",
        ["consultant_id"],
    )
    op.create_index(
        "ix_consultant_job_assignments_status",
        "consultant_job_assignments",
        ["status"],
    )
    op.create_index(
        "idx_assignment_job_status",
        "consultant_job_assignments",
        ["job_id", "status"],
    )
    op.create_index(
        "idx_assignment_consultant_status",
        "consultant_job_assignments",
        ["consultant_id", "status"],
    )

    # At most one ACTIVE assignment per job
    op.create_index(
        "uq_assignment_active_job",
        "consultant_job_assignments",
        ["job_id"],
        unique=True,
        postgresql_where=sa.text("status = 'ACTIVE'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_assignment_active_job", table_name="consultant_job_assignments")
    op.drop_table("consultant_job_assignments")
    op.drop_table("jobs")
    op.drop_table("consultant_languages")
    op.drop_table("consultant_industries")
    op.drop_table("consultants")
    op.drop_table("companies")
    op.drop_table("regions")
