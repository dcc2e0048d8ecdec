"""Create dashboard schema

Revision ID: 1f3c9a7b2d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1f3c9a7b2d10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def _tenant_fk():
    return sa.Column(
        'tenant_id', sa.String(length=36),
        sa.ForeignKey('tenants.tenant_id', ondelete='CASCADE'),
        nullable=False,
    )


def upgrade():
    op.create_table(
        'tenants',
        sa.Column('tenant_id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subdomain', sa.String(length=100), nullable=False),
        sa.Column('business_type', sa.String(length=100), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tenants_subdomain', 'tenants', ['subdomain'], unique=True)
    op.create_index('ix_tenants_business_type', 'tenants', ['business_type'])

    op.create_table(
        'users',
        sa.Column('user_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_users_tenant_email'),
    )
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'customers',
        sa.Column('customer_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('external_source', sa.String(length=100), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.JSON(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_customers_tenant_id', 'customers', ['tenant_id'])
    op.create_index('ix_customers_tenant_external', 'customers', ['tenant_id', 'external_id', 'external_source'])
    op.create_index('ix_customers_tenant_name', 'customers', ['tenant_id', 'name'])
    op.create_index('ix_customers_tenant_email', 'customers', ['tenant_id', 'email'])

    op.create_table(
        'services',
        sa.Column('service_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('metadata', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_services_tenant_id', 'services', ['tenant_id'])
    op.create_index('ix_services_tenant_category', 'services', ['tenant_id', 'category'])
    op.create_index('ix_services_tenant_active', 'services', ['tenant_id', 'is_active'])

    op.create_table(
        'jobs',
        sa.Column('job_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('customer_id', sa.String(length=36), sa.ForeignKey('customers.customer_id'), nullable=False),
        sa.Column('service_id', sa.String(length=36), sa.ForeignKey('services.service_id'), nullable=True),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('external_source', sa.String(length=100), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='scheduled'),
        sa.Column('scheduled_date', sa.Date(), nullable=True),
        sa.Column('scheduled_time_start', sa.Time(), nullable=True),
        sa.Column('scheduled_time_end', sa.Time(), nullable=True),
        sa.Column('actual_start_time', sa.DateTime(), nullable=True),
        sa.Column('actual_end_time', sa.DateTime(), nullable=True),
        sa.Column('quoted_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('final_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('address', sa.JSON(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_jobs_tenant_id', 'jobs', ['tenant_id'])
    op.create_index('ix_jobs_customer_id', 'jobs', ['customer_id'])
    op.create_index('ix_jobs_tenant_scheduled_date', 'jobs', ['tenant_id', 'scheduled_date'])
    op.create_index('ix_jobs_tenant_status', 'jobs', ['tenant_id', 'status'])

    op.create_table(
        'transactions',
        sa.Column('transaction_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('customer_id', sa.String(length=36), sa.ForeignKey('customers.customer_id'), nullable=True),
        sa.Column('job_id', sa.String(length=36), sa.ForeignKey('jobs.job_id'), nullable=True),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('external_source', sa.String(length=100), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('external_data', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_transactions_tenant_id', 'transactions', ['tenant_id'])
    op.create_index('ix_transactions_customer_id', 'transactions', ['customer_id'])
    op.create_index('ix_transactions_job_id', 'transactions', ['job_id'])
    op.create_index('ix_transactions_tenant_date_type', 'transactions', ['tenant_id', 'transaction_date', 'type'])

    op.create_table(
        'integrations',
        sa.Column('integration_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('service_name', sa.String(length=100), nullable=False),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_sync_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'service_name', name='uq_integrations_tenant_service'),
    )
    op.create_index('ix_integrations_tenant_id', 'integrations', ['tenant_id'])

    op.create_table(
        'sync_logs',
        sa.Column('sync_log_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('integration_id', sa.String(length=36), sa.ForeignKey('integrations.integration_id'), nullable=False),
        sa.Column('entity_type', sa.String(length=100), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('records_processed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_sync_logs_tenant_id', 'sync_logs', ['tenant_id'])
    op.create_index('ix_sync_logs_tenant_started_at', 'sync_logs', ['tenant_id', 'started_at'])

    op.create_table(
        'uploaded_files',
        sa.Column('file_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('original_filename', sa.String(length=255), nullable=False),
        sa.Column('file_type', sa.String(length=50), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('storage_path', sa.String(length=500), nullable=True),
        sa.Column('processing_status', sa.String(length=50), nullable=False, server_default='pending'),
        sa.Column('extracted_data', sa.JSON(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('uploaded_by', sa.String(length=36), sa.ForeignKey('users.user_id'), nullable=True),
        *_timestamps(),
        sa.Column('processed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_uploaded_files_tenant_id', 'uploaded_files', ['tenant_id'])
    op.create_index('ix_uploaded_files_processing_status', 'uploaded_files', ['processing_status'])

    op.create_table(
        'dashboard_widgets',
        sa.Column('widget_id', sa.String(length=36), primary_key=True),
        _tenant_fk(),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.user_id'), nullable=True),
        sa.Column('widget_type', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('position_x', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('position_y', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('width', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('height', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_dashboard_widgets_tenant_id', 'dashboard_widgets', ['tenant_id'])
    op.create_index('ix_dashboard_widgets_user_id', 'dashboard_widgets', ['user_id'])

    op.create_table(
        'business_templates',
        sa.Column('template_id', sa.String(length=36), primary_key=True),
        sa.Column('business_type', sa.String(length=100), nullable=False),
        sa.Column('template_name', sa.String(length=255), nullable=False),
        sa.Column('config', sa.JSON(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_business_templates_business_type', 'business_templates', ['business_type'])


def downgrade():
    op.drop_table('business_templates')
    op.drop_table('dashboard_widgets')
    op.drop_table('uploaded_files')
    op.drop_table('sync_logs')
    op.drop_table('integrations')
    op.drop_table('transactions')
    op.drop_table('jobs')
    op.drop_table('services')
    op.drop_table('customers')
    op.drop_table('users')
    op.drop_table('tenants')
