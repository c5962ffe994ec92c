"""
Initial schema.

- Accounts and login sessions
- Joke library with folders, set lists and recordings
- Notebook, notepad and user files
- Jokebook, assistant settings and chat history
- Audit log
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision = 'initial_20261019'
down_revision = None
branch_labels = None
depends_on = None


def _owner_fk(primary_key: bool = False):
    return sa.Column(
        'owner_user_id',
        UUID(as_uuid=True),
        sa.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        primary_key=primary_key,
    )


def _tz():
    return sa.DateTime(timezone=True)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(150), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('created_at', _tz()),
        sa.Column('updated_at', _tz()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'user_sessions',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_id', sa.String(64), nullable=False, unique=True),
        sa.Column('token_hash', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', _tz(), nullable=False),
        sa.Column('last_used_at', _tz()),
        sa.Column('expires_at', _tz()),
        sa.Column('revoked_at', _tz()),
    )
    op.create_index('idx_user_sessions_user_created', 'user_sessions', ['user_id', 'created_at'])
    op.create_index('idx_user_sessions_status', 'user_sessions', ['status'])

    op.create_table(
        'folders',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('created_at', _tz()),
    )
    op.create_index('idx_folders_owner_user_id', 'folders', ['owner_user_id'])

    op.create_table(
        'jokes',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('title', sa.String(30), nullable=False),
        sa.Column('text', sa.Text(), nullable=False, server_default=''),
        sa.Column('folder_id', UUID(as_uuid=True), sa.ForeignKey('folders.id', ondelete='SET NULL')),
        sa.Column('created_at', _tz()),
        sa.Column('updated_at', _tz()),
    )
    op.create_index('idx_jokes_owner_user_id', 'jokes', ['owner_user_id'])
    op.create_index('idx_jokes_folder_id', 'jokes', ['folder_id'])
    op.create_index('idx_jokes_created_at', 'jokes', ['created_at'])

    op.create_table(
        'set_lists',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('joke_order', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('last_performed_at', _tz()),
        sa.Column('created_at', _tz()),
        sa.Column('updated_at', _tz()),
    )
    op.create_index('idx_set_lists_owner_user_id', 'set_lists', ['owner_user_id'])

    op.create_table(
        'recordings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('set_list_id', UUID(as_uuid=True)),
        sa.Column('set_list_name', sa.String(50), nullable=False, server_default=''),
        sa.Column('duration_sec', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(100), nullable=False, server_default='audio/webm'),
        sa.Column('storage_path', sa.Text(), nullable=False),
        sa.Column('size_bytes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', _tz()),
    )
    op.create_index('idx_recordings_owner_user_id', 'recordings', ['owner_user_id'])
    op.create_index('idx_recordings_set_list_id', 'recordings', ['set_list_id'])
    op.create_index('idx_recordings_created_at', 'recordings', ['created_at'])

    op.create_table(
        'notebook_entries',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', _tz()),
        sa.Column('updated_at', _tz()),
    )
    op.create_index('idx_notebook_entries_owner_user_id', 'notebook_entries', ['owner_user_id'])

    op.create_table(
        'notepads',
        _owner_fk(primary_key=True),
        sa.Column('text', sa.Text(), nullable=False, server_default=''),
        sa.Column('updated_at', _tz()),
    )

    op.create_table(
        'user_files',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_content', sa.Text(), nullable=False, server_default=''),
        sa.Column('last_updated', _tz()),
    )
    op.create_index('idx_user_files_owner_user_id', 'user_files', ['owner_user_id'])

    op.create_table(
        'jokebook_entries',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('folder', sa.String(100), nullable=False, server_default='bitbuddy'),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('created_at', _tz()),
        sa.Column('updated_at', _tz()),
    )
    op.create_index('idx_jokebook_entries_owner_folder', 'jokebook_entries', ['owner_user_id', 'folder'])

    op.create_table(
        'assistant_settings',
        _owner_fk(primary_key=True),
        sa.Column('openai_api_key', sa.Text()),
        sa.Column('last_generated_joke', sa.Text()),
        sa.Column('updated_at', _tz()),
    )

    op.create_table(
        'chat_messages',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        _owner_fk(),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', _tz()),
    )
    op.create_index('idx_chat_messages_owner_created', 'chat_messages', ['owner_user_id', 'created_at'])

    op.create_table(
        'audit_logs',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('action_type', sa.String(100), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('target_type', sa.String(50), nullable=False),
        sa.Column('target_id', UUID(as_uuid=True)),
        sa.Column('metadata', sa.JSON()),
        sa.Column('created_at', _tz()),
    )
    op.create_index('idx_audit_logs_actor_created', 'audit_logs', ['actor_user_id', 'created_at'])
    op.create_index('idx_audit_logs_action_type', 'audit_logs', ['action_type'])


def downgrade() -> None:
    for table in (
        'audit_logs',
        'chat_messages',
        'assistant_settings',
        'jokebook_entries',
        'user_files',
        'notepads',
        'notebook_entries',
        'recordings',
        'set_lists',
        'jokes',
        'folders',
        'user_sessions',
        'users',
    ):
        op.drop_table(table)
