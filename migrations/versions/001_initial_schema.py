"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Evidence Integrity database schema:
- evidence
- evidence_hashes
- verification_logs
- youtube_comparisons
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'evidence',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('platform', sa.Enum('twitter', 'facebook', 'youtube', 'other',
                                      name='platform'), nullable=False),
        sa.Column('evidence_type', sa.Enum('post', 'image', 'video', 'comment', 'profile',
                                           name='evidence_type'), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('case_id', sa.String(100), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('status', sa.Enum('collected', 'verified', 'tampered', 'flagged', 'archived',
                                    name='evidence_status'), nullable=False),
        sa.Column('collected_by', sa.String(255), nullable=True),
        sa.Column('collected_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_evidence_case_status', 'evidence', ['case_id', 'status'])
    op.create_index('ix_evidence_platform_created', 'evidence', ['platform', 'created_at'])

    op.create_table(
        'evidence_hashes',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('evidence_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('hash_algorithm', sa.String(32), nullable=False),
        sa.Column('hash_type', sa.Enum('content', 'metadata', 'thumbnail', 'frame_sample', 'full_file',
                                       name='hash_type'), nullable=False),
        sa.Column('hash_value', sa.String(128), nullable=False),
        sa.Column('computed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['evidence_id'], ['evidence.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hashes_evidence_type', 'evidence_hashes', ['evidence_id', 'hash_type'])
    op.create_index('ix_hashes_value', 'evidence_hashes', ['hash_value'])

    op.create_table(
        'verification_logs',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('evidence_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('verification_type', sa.String(50), nullable=False),
        sa.Column('original_hash', sa.String(128), nullable=False),
        sa.Column('current_hash', sa.String(128), nullable=False),
        sa.Column('is_valid', sa.Boolean(), nullable=False),
        sa.Column('discrepancies', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('verified_by', sa.String(255), nullable=False),
        sa.Column('verified_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['evidence_id'], ['evidence.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_verification_evidence_time', 'verification_logs', ['evidence_id', 'verified_at'])

    op.create_table(
        'youtube_comparisons',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('comparison_name', sa.String(500), nullable=False),
        sa.Column('video_ids', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('similarity_scores', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('flagged_duplicates', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_by', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_comparisons_creator_created', 'youtube_comparisons', ['created_by', 'created_at'])


def downgrade() -> None:
    op.drop_table('youtube_comparisons')
    op.drop_table('verification_logs')
    op.drop_table('evidence_hashes')
    op.drop_table('evidence')

    op.execute('DROP TYPE IF EXISTS hash_type')
    op.execute('DROP TYPE IF EXISTS evidence_status')
    op.execute('DROP TYPE IF EXISTS evidence_type')
    op.execute('DROP TYPE IF EXISTS platform')
