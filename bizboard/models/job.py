from bizboard.extensions import db
from datetime import datetime
import uuid

JOB_STATUSES = ('scheduled', 'in_progress', 'completed', 'cancelled')
PENDING_STATUSES = ('scheduled', 'in_progress')


def _iso(value):
    return value.isoformat() if value is not None else None


def _amount(value):
    return float(value) if value is not None else None


class Job(db.Model):
    __tablename__ = 'jobs'
    __table_args__ = (
        db.Index('ix_jobs_tenant_scheduled_date', 'tenant_id', 'scheduled_date'),
        db.Index('ix_jobs_tenant_status', 'tenant_id', 'status'),
    )

    """
    Job Model - A unit of field work booked for a customer.

    Attributes:
        job_id (str): Unique identifier (UUID)
        tenant_id (str): Which tenant owns this job
        customer_id (str): Customer the work is for (required)
        service_id (str): Service being performed (optional)
        status (str): 'scheduled', 'in_progress', 'completed', 'cancelled'.
            Free text; only display code and dashboard counts interpret it.
        scheduled_date (date): Day the job is booked for
        scheduled_time_start / scheduled_time_end (time): Booked window
        actual_start_time / actual_end_time (datetime): Recorded on site
        quoted_amount / final_amount (Decimal): Money, 2 decimals
    """

    job_id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = db.Column(db.String(36), db.ForeignKey('tenants.tenant_id', ondelete='CASCADE'), nullable=False, index=True)
    customer_id = db.Column(db.String(36), db.ForeignKey('customers.customer_id'), nullable=False, index=True)
    service_id = db.Column(db.String(36), db.ForeignKey('services.service_id'), nullable=True)
    external_id = db.Column(db.String(255))
    external_source = db.Column(db.String(100))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(db.String(50), nullable=False, default='scheduled')
    scheduled_date = db.Column(db.Date)
    scheduled_time_start = db.Column(db.Time)
    scheduled_time_end = db.Column(db.Time)
    actual_start_time = db.Column(db.DateTime)
    actual_end_time = db.Column(db.DateTime)
    quoted_amount = db.Column(db.Numeric(10, 2))
    final_amount = db.Column(db.Numeric(10, 2))
    address = db.Column(db.JSON)
    meta = db.Column('metadata', db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    service = db.relationship('Service')

    def to_dict(self, customer_name=None, service_name=None):
        """Convert job to the camelCase dictionary the dashboard renders."""
        return {
            "id": self.job_id,
            "tenantId": self.tenant_id,
            "customerId": self.customer_id,
            "serviceId": self.service_id,
            "externalId": self.external_id,
            "externalSource": self.external_source,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "scheduledDate": _iso(self.scheduled_date),
            "scheduledTimeStart": _iso(self.scheduled_time_start),
            "scheduledTimeEnd": _iso(self.scheduled_time_end),
            "actualStartTime": _iso(self.actual_start_time),
            "actualEndTime": _iso(self.actual_end_time),
            "quotedAmount": _amount(self.quoted_amount),
            "finalAmount": _amount(self.final_amount),
            "address": self.address,
            "metadata": self.meta,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
            "customerName": customer_name,
            "serviceName": service_name,
        }
