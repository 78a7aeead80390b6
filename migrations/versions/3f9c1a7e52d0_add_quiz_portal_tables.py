"""Add quiz portal tables

Revision ID: 3f9c1a7e52d0
Revises:
Create Date: 2026-10-18 10:30:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9c1a7e52d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('user_type', sa.String(length=20), nullable=False),
            sa.Column('full_name', sa.String(length=255), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('time_limit_seconds', sa.Integer(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('created_by', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_is_active', 'quizzes', ['is_active'], unique=False)
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    if 'quiz_questions' not in tables:
        op.create_table('quiz_questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.String(length=32), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('options', sa.JSON(), nullable=False),
            sa.Column('correct_index', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('quiz_id', 'position', name='uq_quiz_question_position')
        )
        op.create_index('ix_quiz_questions_quiz_id', 'quiz_questions', ['quiz_id'], unique=False)

    if 'quiz_submissions' not in tables:
        op.create_table('quiz_submissions',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('quiz_id', sa.String(length=32), nullable=False),
            sa.Column('student_id', sa.Integer(), nullable=False),
            sa.Column('student_email', sa.String(length=255), nullable=True),
            sa.Column('selected_indices', sa.JSON(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('total', sa.Integer(), nullable=False),
            sa.Column('on_time', sa.Boolean(), nullable=False),
            sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('time_spent_seconds', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quiz_submissions_quiz_id', 'quiz_submissions', ['quiz_id'], unique=False)
        op.create_index('ix_quiz_submissions_student_id', 'quiz_submissions', ['student_id'], unique=False)
        op.create_index('ix_quiz_submissions_created_at', 'quiz_submissions', ['created_at'], unique=False)
        op.create_index('ix_quiz_submissions_quiz_student', 'quiz_submissions', ['quiz_id', 'student_id'], unique=False)


def downgrade():
    op.drop_index('ix_quiz_submissions_quiz_student', table_name='quiz_submissions')
    op.drop_index('ix_quiz_submissions_created_at', table_name='quiz_submissions')
    op.drop_index('ix_quiz_submissions_student_id', table_name='quiz_submissions')
    op.drop_index('ix_quiz_submissions_quiz_id', table_name='quiz_submissions')
    op.drop_table('quiz_submissions')

    op.drop_index('ix_quiz_questions_quiz_id', table_name='quiz_questions')
    op.drop_table('quiz_questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_index('ix_quizzes_is_active', table_name='quizzes')
    op.drop_table('quizzes')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
