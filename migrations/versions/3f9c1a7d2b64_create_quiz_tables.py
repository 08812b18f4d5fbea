"""Create quiz and submission tables

Revision ID: 3f9c1a7d2b64
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9c1a7d2b64'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    # Create quizzes table
    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('theme', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    # Create questions table
    if 'questions' not in tables:
        op.create_table('questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('text', sa.String(length=1000), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_questions_quiz_id', 'questions', ['quiz_id'], unique=False)

    # Create options table
    if 'options' not in tables:
        op.create_table('options',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=False),
            sa.Column('text', sa.String(length=1000), nullable=False),
            sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_options_question_id', 'options', ['question_id'], unique=False)

    # Create submissions table; quiz_id has no foreign key
    if 'submissions' not in tables:
        op.create_table('submissions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_questions', sa.Integer(), nullable=False),
            sa.Column('submitted_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_submissions_quiz_id', 'submissions', ['quiz_id'], unique=False)

    # Create answers table
    if 'answers' not in tables:
        op.create_table('answers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('submission_id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=False),
            sa.Column('selected_option_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['submission_id'], ['submissions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_answers_submission_id', 'answers', ['submission_id'], unique=False)


def downgrade():
    op.drop_index('ix_answers_submission_id', table_name='answers')
    op.drop_table('answers')

    op.drop_index('ix_submissions_quiz_id', table_name='submissions')
    op.drop_table('submissions')

    op.drop_index('ix_options_question_id', table_name='options')
    op.drop_table('options')

    op.drop_index('ix_questions_quiz_id', table_name='questions')
    op.drop_table('questions')

    op.drop_table('quizzes')
