from bizboard.extensions import db
from datetime import datetime
import uuid


class BusinessTemplate(db.Model):
    __tablename__ = 'business_templates'

    """
    BusinessTemplate Model - Default dashboard layout per business type.

    Not tenant scoped: every cleaning company starts from the same
    'cleaning' template. config holds {"widgets": [...], "kpis": [...]}.
    """

    template_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    business_type = db.Column(db.String(100), nullable=False, index=True)
    template_name = db.Column(db.String(255), nullable=False)
    config = db.Column(db.JSON, nullable=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.template_id,
            "businessType": self.business_type,
            "templateName": self.template_name,
            "config": self.config,
            "isDefault": self.is_default,
        }
