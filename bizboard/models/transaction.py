from bizboard.extensions import db
from datetime import datetime
import uuid

TRANSACTION_TYPES = ('invoice', 'payment', 'expense', 'refund')


class Transaction(db.Model):
    __tablename__ = 'transactions'
    __table_args__ = (
        db.Index('ix_transactions_tenant_date_type', 'tenant_id', 'transaction_date', 'type'),
    )

    """
    Transaction Model - Money moving in or out of a tenant's business.

    Revenue on the dashboard only counts rows with type='payment' and
    status='completed'. Invoices, expenses and refunds are stored alongside.
    """

    transaction_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    customer_id = db.Column(db.String(36), db.ForeignKey('customers.customer_id'), nullable=True, index=True)
    job_id = db.Column(db.String(36), db.ForeignKey('jobs.job_id'), nullable=True, index=True)
    external_id = db.Column(db.String(255))
    external_source = db.Column(db.String(100))
    type = db.Column(db.String(50), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    currency = db.Column(db.String(3), nullable=False, default='USD')
    description = db.Column(db.Text)
    transaction_date = db.Column(db.Date, nullable=False)
    due_date = db.Column(db.Date)
    status = db.Column(db.String(50))
    external_data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
