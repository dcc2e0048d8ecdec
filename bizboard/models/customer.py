from bizboard.extensions import db
from datetime import datetime
import uuid


class Customer(db.Model):
    __tablename__ = 'customers'
    __table_args__ = (
        db.Index('ix_customers_tenant_external', 'tenant_id', 'external_id', 'external_source'),
        db.Index('ix_customers_tenant_name', 'tenant_id', 'name'),
        db.Index('ix_customers_tenant_email', 'tenant_id', 'email'),
    )

    customer_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    # Set when the row was imported from an integration (QuickBooks, Jobber, ...)
    external_id = db.Column(db.String(255))
    external_source = db.Column(db.String(100))
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    address = db.Column(db.JSON)
    # "metadata" is reserved on declarative models
    meta = db.Column('metadata', db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    jobs = db.relationship('Job', backref='customer', lazy='dynamic')
