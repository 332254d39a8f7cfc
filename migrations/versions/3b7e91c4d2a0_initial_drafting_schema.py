"""initial drafting schema

Revision ID: 3b7e91c4d2a0
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3b7e91c4d2a0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('projects',
    sa.Column('title', sa.String(), nullable=False),
    sa.Column('jurisdiction', sa.String(), nullable=False),
    sa.Column('owner_id', sa.String(), nullable=True),
    sa.Column('intake_notes', sa.Text(), nullable=True),
    sa.Column('extracted_json', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
    sa.Column('intake_summary', sa.Text(), nullable=True),
    sa.Column('interview_completed', sa.Boolean(), nullable=False),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_projects_owner_id'), 'projects', ['owner_id'], unique=False)

    op.create_table('interview_answers',
    sa.Column('project_id', sa.UUID(), nullable=False),
    sa.Column('question_key', sa.String(), nullable=False),
    sa.Column('answer', sa.Text(), nullable=False),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('project_id', 'question_key', name='uq_interview_answers_project_key')
    )
    op.create_index(op.f('ix_interview_answers_project_id'), 'interview_answers', ['project_id'], unique=False)

    op.create_table('interview_questions',
    sa.Column('project_id', sa.UUID(), nullable=False),
    sa.Column('order', sa.Integer(), nullable=False),
    sa.Column('category', sa.String(), nullable=False),
    sa.Column('prompt', sa.Text(), nullable=False),
    sa.Column('help_text', sa.Text(), nullable=True),
    sa.Column('answer_type', sa.Enum('TEXT', 'BULLETS', 'LONGTEXT', name='answertype'), nullable=False),
    sa.Column('required', sa.Boolean(), nullable=False),
    sa.Column('answer', sa.Text(), nullable=True),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_interview_questions_project_id'), 'interview_questions', ['project_id'], unique=False)

    op.create_table('draft_sections',
    sa.Column('project_id', sa.UUID(), nullable=False),
    sa.Column('section_key', sa.Enum('TITLE', 'BACKGROUND', 'SUMMARY', 'DRAWINGS', 'DETAILED_DESC', 'ABSTRACT', 'CLAIMS', name='sectionkey'), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('project_id', 'section_key', name='uq_draft_sections_project_key')
    )
    op.create_index(op.f('ix_draft_sections_project_id'), 'draft_sections', ['project_id'], unique=False)

    op.create_table('quality_issues',
    sa.Column('project_id', sa.UUID(), nullable=False),
    sa.Column('type', sa.Enum('MISSING_SUPPORT', 'VAGUE_TERM', 'ANTECEDENT_BASIS', 'TERM_CONSISTENCY', name='quality_issue_type'), nullable=False),
    sa.Column('severity', sa.Enum('HIGH', 'MED', 'LOW', name='quality_issue_severity'), nullable=False),
    sa.Column('message', sa.Text(), nullable=False),
    sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
    sa.Column('position', sa.Integer(), nullable=False),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_quality_issues_project_id'), 'quality_issues', ['project_id'], unique=False)

    op.create_table('token_usage',
    sa.Column('owner_id', sa.String(), nullable=False),
    sa.Column('project_id', sa.UUID(), nullable=True),
    sa.Column('operation', sa.String(), nullable=False),
    sa.Column('model', sa.String(), nullable=False),
    sa.Column('prompt_tokens', sa.Integer(), nullable=False),
    sa.Column('completion_tokens', sa.Integer(), nullable=False),
    sa.Column('total_tokens', sa.Integer(), nullable=False),
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_token_usage_owner_id'), 'token_usage', ['owner_id'], unique=False)
    op.create_index(op.f('ix_token_usage_project_id'), 'token_usage', ['project_id'], unique=False)
    op.create_index('ix_token_usage_owner_created', 'token_usage', ['owner_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_token_usage_owner_created', table_name='token_usage')
    op.drop_index(op.f('ix_token_usage_project_id'), table_name='token_usage')
    op.drop_index(op.f('ix_token_usage_owner_id'), table_name='token_usage')
    op.drop_table('token_usage')
    op.drop_index(op.f('ix_quality_issues_project_id'), table_name='quality_issues')
    op.drop_table('quality_issues')
    op.drop_index(op.f('ix_draft_sections_project_id'), table_name='draft_sections')
    op.drop_table('draft_sections')
    op.drop_index(op.f('ix_interview_questions_project_id'), table_name='interview_questions')
    op.drop_table('interview_questions')
    op.drop_index(op.f('ix_interview_answers_project_id'), table_name='interview_answers')
    op.drop_table('interview_answers')
    op.drop_index(op.f('ix_projects_owner_id'), table_name='projects')
    op.drop_table('projects')
    sa.Enum(name='quality_issue_severity').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='quality_issue_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='sectionkey').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='answertype').drop(op.get_bind(), checkfirst=True)
