from bizboard.extensions import db
from datetime import datetime
import uuid


class UploadedFile(db.Model):
    """Spreadsheet/CSV uploaded by a user for import. Processing is tracked by status only."""

    __tablename__ = 'uploaded_files'

    file_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    original_filename = db.Column(db.String(255), nullable=False)
    file_type = db.Column(db.String(50))
    file_size = db.Column(db.Integer)
    storage_path = db.Column(db.String(500))
    processing_status = db.Column(db.String(50), nullable=False, default='pending', index=True)  # 'pending', 'processing', 'completed', 'error'
    extracted_data = db.Column(db.JSON)
    error_message = db.Column(db.Text)
    uploaded_by = db.Column(db.String(36), db.ForeignKey('users.user_id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    processed_at = db.Column(db.DateTime)
