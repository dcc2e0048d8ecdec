from bizboard.extensions import db
from datetime import datetime
import uuid


def normalize_subdomain(value):
    """Subdomains are stored and matched in lowercase; host names arrive that way."""
    if value is None:
        return None
    return value.strip().lower()


class Tenant(db.Model):
    __tablename__ = 'tenants'

    """
    Tenant Model - One small business using the dashboard.

    Every other business row carries a tenant_id. Deleting a tenant deletes
    all of its data (users, customers, services, jobs, transactions,
    integrations, files, widgets) via CASCADE.

    Attributes:
        tenant_id (str): Unique identifier (UUID)
        name (str): Business name (e.g., "Demo Cleaning Company")
        subdomain (str): Tenant selector used in the host name, unique
        business_type (str): 'cleaning', 'landscaping', 'hvac', ...
        settings (dict): Free-form settings (timezone, currency, hours)
        created_at (datetime): When tenant was created
    """

    tenant_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    subdomain = db.Column(db.String(100), unique=True, nullable=False, index=True)
    business_type = db.Column(db.String(100), nullable=False, index=True)
    settings = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships - CASCADE means deleting tenant deletes all related data
    users = db.relationship('User', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    customers = db.relationship('Customer', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    services = db.relationship('Service', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    jobs = db.relationship('Job', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    transactions = db.relationship('Transaction', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    integrations = db.relationship('Integration', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    sync_logs = db.relationship('SyncLog', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    uploaded_files = db.relationship('UploadedFile', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)
    dashboard_widgets = db.relationship('DashboardWidget', backref='tenant', cascade='all, delete-orphan', passive_deletes=True)

    def __repr__(self):
        return f"<Tenant {self.subdomain}>"
