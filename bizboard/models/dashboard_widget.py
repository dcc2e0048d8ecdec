from bizboard.extensions import db
from datetime import datetime
import uuid


class DashboardWidget(db.Model):
    __tablename__ = 'dashboard_widgets'

    widget_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    # NULL user_id means the widget is the tenant-wide default
    user_id = db.Column(db.String(36), db.ForeignKey('users.user_id'), nullable=True, index=True)
    widget_type = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(255))
    position_x = db.Column(db.Integer, nullable=False, default=0)
    position_y = db.Column(db.Integer, nullable=False, default=0)
    width = db.Column(db.Integer, nullable=False, default=1)
    height = db.Column(db.Integer, nullable=False, default=1)
    config = db.Column(db.JSON, nullable=False, default=dict)
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
