from bizboard.extensions import db
from datetime import datetime
import uuid


class Integration(db.Model):
    __tablename__ = 'integrations'
    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'service_name', name='uq_integrations_tenant_service'),
    )

    """
    Integration Model - Connection settings for an external system
    (QuickBooks, Jobber, Google Calendar, ...). One row per service per tenant.
    """

    integration_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    service_name = db.Column(db.String(100), nullable=False)
    config = db.Column(db.JSON, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_sync_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    sync_logs = db.relationship('SyncLog', backref='integration', lazy='dynamic')


class SyncLog(db.Model):
    __tablename__ = 'sync_logs'
    __table_args__ = (
        db.Index('ix_sync_logs_tenant_started_at', 'tenant_id', 'started_at'),
    )

    sync_log_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    integration_id = db.Column(db.String(36), db.ForeignKey('integrations.integration_id'), nullable=False)
    entity_type = db.Column(db.String(100))
    status = db.Column(db.String(50))
    records_processed = db.Column(db.Integer, nullable=False, default=0)
    error_message = db.Column(db.Text)
    started_at = db.Column(db.DateTime, default=datetime.utcnow)
    completed_at = db.Column(db.DateTime)
