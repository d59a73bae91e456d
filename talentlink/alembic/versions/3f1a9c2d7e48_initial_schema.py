"""initial_schema

Revision ID: 3f1a9c2d7e48
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7e48'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _job_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_name', sa.String(255), nullable=True),
        sa.Column('job_type', sa.String(100), nullable=True),
        sa.Column('salary_range', sa.JSON, nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('experience_level', sa.String(100), nullable=True),
        sa.Column('qualifications', sa.JSON, nullable=False),
        sa.Column('skills', sa.JSON, nullable=False),
        sa.Column('responsibilities', sa.JSON, nullable=False),
        sa.Column('company_name', sa.String(255), nullable=True),
        sa.Column('company_description', sa.Text, nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('company_email', sa.String(255), nullable=True),
        sa.Column('company_phone_number', sa.String(50), nullable=True),
        sa.Column('posted_date', sa.String(64), nullable=True),
        sa.Column('application_deadline', sa.String(64), nullable=True),
        sa.Column('employment_benefits', sa.JSON, nullable=False),
        sa.Column('work_schedule', sa.String(255), nullable=True),
        sa.Column('tags', sa.JSON, nullable=False),
        sa.Column('employer_id', sa.String(36), nullable=False, index=True),
        sa.Column('applicants', sa.JSON, nullable=False),
    ]


def upgrade() -> None:
    """Create users and job collections."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('is_employer', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_admin', sa.Boolean, nullable=True),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('position', sa.String(255), nullable=True),
        sa.Column('company_size', sa.String(50), nullable=True),
        sa.Column('school', sa.String(255), nullable=True),
        sa.Column('graduation_year', sa.Integer, nullable=True),
        sa.Column('major', sa.String(255), nullable=True),
        sa.Column('applied_jobs', sa.JSON, nullable=False),
        sa.Column('published_jobs', sa.JSON, nullable=False),
        sa.Column('pending_jobs', sa.JSON, nullable=False),
        sa.Column('notifications', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table('pending_jobs', *_job_columns())
    op.create_table('published_jobs', *_job_columns())


def downgrade() -> None:
    """Drop users and job collections."""
    op.drop_table('published_jobs')
    op.drop_table('pending_jobs')
    op.drop_table('users')
