"""initial job board schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('avatar_url', sa.String(500)),
        sa.Column('headline', sa.String(255)),
        sa.Column('summary', sa.Text()),
        sa.Column('experience', sa.JSON(), nullable=False),
        sa.Column('education', sa.JSON(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('resume_url', sa.String(500)),
        sa.Column('linkedin_url', sa.String(500)),
        sa.Column('github_url', sa.String(500)),
        sa.Column('portfolio_url', sa.String(500)),
        sa.Column('phone', sa.String(50)),
        sa.Column('location', sa.String(255)),
        *_timestamps(),
    )
    op.create_index('ix_profiles_id', 'profiles', ['id'])
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', sa.Text(), nullable=False),
        sa.Column('salary', sa.String(100), nullable=False),
        sa.Column('experience', sa.String(20), nullable=False),
        sa.Column('skills', sa.Text(), nullable=False),
        sa.Column('employer_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('unique_views', sa.Integer(), nullable=False),
        sa.Column('analytics_data', sa.JSON(), nullable=False),
        *_timestamps(),
        # ids of deleted jobs must never come back: applications keep pointing at them
        sqlite_autoincrement=True,
    )
    for col in ('id', 'title', 'company', 'employer_id', 'status'):
        op.create_index(f'ix_jobs_{col}', 'jobs', [col])

    op.create_table(
        'job_views',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('viewed_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('job_id', 'user_id', name='uq_job_views_job_user'),
    )
    op.create_index('ix_job_views_job_id', 'job_views', ['job_id'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('applicant_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employer_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cover_letter', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint('job_id', 'applicant_id', name='uq_applications_job_applicant'),
    )
    for col in ('id', 'job_id', 'applicant_id', 'employer_id'):
        op.create_index(f'ix_applications_{col}', 'applications', [col])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_table('job_views')
    op.drop_table('jobs')
    op.drop_table('profiles')
    op.drop_table('users')
