from bizboard.extensions import db
from datetime import datetime
import uuid

ROLES = ('admin', 'manager', 'user')


class User(db.Model):
    __tablename__ = 'users'
    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'email', name='uq_users_tenant_email'),
    )

    """
    User Model - A person who logs into one tenant's dashboard.

    The same email may exist in several tenants; it is unique only within
    a tenant.

    Attributes:
        user_id (str): Unique identifier (UUID)
        tenant_id (str): Which business this user belongs to
        email (str): Login email, unique per tenant
        password_hash (str): Werkzeug password hash (never store plaintext!)
        role (str): 'admin', 'manager' or 'user'
        is_active (bool): Can user login?
    """

    user_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    role = db.Column(db.String(50), nullable=False, default='user')
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.email} tenant={self.tenant_id}>"
