from bizboard.models.tenant import Tenant
from bizboard.models.user import User
from bizboard.models.customer import Customer
from bizboard.models.service import Service
from bizboard.models.job import Job
from bizboard.models.transaction import Transaction
from bizboard.models.integration import Integration, SyncLog
from bizboard.models.uploaded_file import UploadedFile
from bizboard.models.dashboard_widget import DashboardWidget
from bizboard.models.business_template import BusinessTemplate

__all__ = [
    'Tenant',
    'User',
    'Customer',
    'Service',
    'Job',
    'Transaction',
    'Integration',
    'SyncLog',
    'UploadedFile',
    'DashboardWidget',
    'BusinessTemplate',
]
