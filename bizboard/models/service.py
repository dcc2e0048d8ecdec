from bizboard.extensions import db
from datetime import datetime
import uuid


class Service(db.Model):
    """A billable service offered by a tenant (e.g. "Deep Cleaning")."""

    __tablename__ = 'services'
    __table_args__ = (
        db.Index('ix_services_tenant_category', 'tenant_id', 'category'),
        db.Index('ix_services_tenant_active', 'tenant_id', 'is_active'),
    )

    service_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(100))
    base_price = db.Column(db.Numeric(10, 2))
    unit = db.Column(db.String(50))
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    meta = db.Column('metadata', db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
