"""
Flask CLI commands.

Usage:
    flask --app run seed-demo
    flask --app run create-user admin@acme.com secret123 --subdomain acme
"""
from datetime import datetime, time, timedelta

import click

from bizboard.extensions import db
from bizboard.models import (
    BusinessTemplate,
    Customer,
    DashboardWidget,
    Integration,
    Job,
    Service,
    SyncLog,
    Tenant,
    Transaction,
    UploadedFile,
    User,
)
from bizboard.models.tenant import normalize_subdomain
from bizboard.services.auth_service import hash_password

DEMO_PASSWORD = 'password123'

DEMO_TENANTS = [
    {
        "name": "Demo Cleaning Company",
        "subdomain": "demo",
        "business_type": "cleaning",
        "settings": {
            "timezone": "America/New_York",
            "currency": "USD",
            "business_hours": {
                "monday": {"start": "08:00", "end": "18:00"},
                "tuesday": {"start": "08:00", "end": "18:00"},
                "wednesday": {"start": "08:00", "end": "18:00"},
                "thursday": {"start": "08:00", "end": "18:00"},
                "friday": {"start": "08:00", "end": "18:00"},
                "saturday": {"start": "09:00", "end": "15:00"},
                "sunday": {"closed": True},
            },
        },
    },
    {
        "name": "GreenScape Landscaping",
        "subdomain": "greenscape",
        "business_type": "landscaping",
        "settings": {"timezone": "America/Los_Angeles", "currency": "USD"},
    },
    {
        "name": "HVAC Pro Services",
        "subdomain": "hvacpro",
        "business_type": "hvac",
        "settings": {"timezone": "America/Chicago", "currency": "USD"},
    },
]

DEMO_USERS = [
    ("demo", "admin@demo.com", "Demo", "Admin", "admin"),
    ("demo", "manager@demo.com", "Demo", "Manager", "manager"),
    ("greenscape", "admin@greenscape.com", "Green", "Admin", "admin"),
    ("hvacpro", "admin@hvacpro.com", "HVAC", "Admin", "admin"),
]

BUSINESS_TEMPLATES = [
    {
        "business_type": "cleaning",
        "template_name": "Standard Cleaning Dashboard",
        "config": {
            "widgets": [
                {"type": "revenue_overview", "position": {"x": 0, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "job_status", "position": {"x": 2, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "recent_jobs", "position": {"x": 0, "y": 1}, "size": {"w": 2, "h": 2}},
                {"type": "customer_growth", "position": {"x": 2, "y": 1}, "size": {"w": 2, "h": 2}},
            ],
            "kpis": ["total_revenue", "completed_jobs", "customer_count", "avg_job_value"],
        },
    },
    {
        "business_type": "landscaping",
        "template_name": "Landscaping Dashboard",
        "config": {
            "widgets": [
                {"type": "seasonal_revenue", "position": {"x": 0, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "property_status", "position": {"x": 2, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "weather_alerts", "position": {"x": 0, "y": 1}, "size": {"w": 1, "h": 1}},
                {"type": "equipment_status", "position": {"x": 1, "y": 1}, "size": {"w": 1, "h": 1}},
            ],
            "kpis": ["seasonal_revenue", "properties_maintained", "crew_utilization", "equipment_cost"],
        },
    },
    {
        "business_type": "hvac",
        "template_name": "HVAC Service Dashboard",
        "config": {
            "widgets": [
                {"type": "service_calls", "position": {"x": 0, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "emergency_calls", "position": {"x": 2, "y": 0}, "size": {"w": 2, "h": 1}},
                {"type": "technician_schedule", "position": {"x": 0, "y": 1}, "size": {"w": 2, "h": 2}},
                {"type": "parts_inventory", "position": {"x": 2, "y": 1}, "size": {"w": 2, "h": 2}},
            ],
            "kpis": ["service_revenue", "emergency_response_time", "technician_utilization", "customer_satisfaction"],
        },
    },
]


def clear_demo_data():
    # Children first; tenants last
    for model in (SyncLog, UploadedFile, DashboardWidget, Transaction, Job,
                  Service, Customer, Integration, User, Tenant, BusinessTemplate):
        db.session.query(model).delete()


def seed_demo_data(now=None):
    """Insert the demo tenants, users, customers, services, jobs and transactions."""
    now = now or datetime.utcnow()
    today = now.date()
    yesterday = today - timedelta(days=1)
    tomorrow = today + timedelta(days=1)
    next_week = today + timedelta(days=7)

    tenants = {}
    for attrs in DEMO_TENANTS:
        tenant = Tenant(**attrs)
        db.session.add(tenant)
        tenants[attrs['subdomain']] = tenant
    db.session.flush()

    password_hash = hash_password(DEMO_PASSWORD)
    for subdomain, email, first_name, last_name, role in DEMO_USERS:
        db.session.add(User(
            tenant_id=tenants[subdomain].tenant_id,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        ))

    demo_id = tenants['demo'].tenant_id

    johnson = Customer(
        tenant_id=demo_id,
        name='Johnson Family',
        email='mary@johnson.com',
        phone='(555) 123-4567',
        address={"street": "123 Oak Street", "city": "Springfield", "state": "IL", "zip": "62701"},
        meta={"preferred_time": "morning", "special_instructions": "Use eco-friendly products"},
    )
    smith = Customer(
        tenant_id=demo_id,
        name='Smith Office Building',
        email='facilities@smithcorp.com',
        phone='(555) 987-6543',
        address={"street": "456 Business Ave", "city": "Springfield", "state": "IL", "zip": "62702"},
        meta={"contact_person": "Janet Smith", "access_code": "1234"},
    )
    brown = Customer(
        tenant_id=demo_id,
        name='Brown Apartment Complex',
        email='manager@brownapts.com',
        phone='(555) 456-7890',
        address={"street": "789 Residential Blvd", "city": "Springfield", "state": "IL", "zip": "62703"},
        meta={"units": ["A1", "A2", "B1", "B2"], "key_location": "Front office"},
    )

    standard = Service(tenant_id=demo_id, name='Standard House Cleaning', description='Regular weekly cleaning service',
                       category='residential', base_price=120, unit='per_visit')
    deep = Service(tenant_id=demo_id, name='Deep Cleaning', description='Comprehensive deep cleaning service',
                   category='residential', base_price=250, unit='per_visit')
    office = Service(tenant_id=demo_id, name='Office Cleaning', description='Commercial office cleaning',
                     category='commercial', base_price=200, unit='per_visit')
    move_out = Service(tenant_id=demo_id, name='Move-out Cleaning', description='Complete cleaning for move-out',
                       category='specialty', base_price=300, unit='per_visit')

    db.session.add_all([johnson, smith, brown, standard, deep, office, move_out])
    db.session.flush()

    yesterday_start = datetime.combine(yesterday, time(0, 0))
    db.session.add_all([
        Job(
            tenant_id=demo_id, customer_id=johnson.customer_id, service_id=standard.service_id,
            title='Weekly House Cleaning - Johnson Residence',
            description='Regular weekly cleaning service',
            status='completed',
            scheduled_date=yesterday, scheduled_time_start=time(9, 0), scheduled_time_end=time(11, 0),
            actual_start_time=yesterday_start + timedelta(hours=9),
            actual_end_time=yesterday_start + timedelta(hours=11),
            quoted_amount=120, final_amount=120,
            created_at=now - timedelta(minutes=4),
        ),
        Job(
            tenant_id=demo_id, customer_id=smith.customer_id, service_id=office.service_id,
            title='Office Cleaning - Smith Corp',
            description='Weekly office cleaning service',
            status='in_progress',
            scheduled_date=today, scheduled_time_start=time(18, 0), scheduled_time_end=time(20, 0),
            quoted_amount=200,
            created_at=now - timedelta(minutes=3),
        ),
        Job(
            tenant_id=demo_id, customer_id=brown.customer_id, service_id=move_out.service_id,
            title='Move-out Cleaning - Brown Apartments Unit A1',
            description='Complete move-out cleaning for apartment A1',
            status='scheduled',
            scheduled_date=tomorrow, scheduled_time_start=time(10, 0), scheduled_time_end=time(14, 0),
            quoted_amount=300,
            created_at=now - timedelta(minutes=2),
        ),
        Job(
            tenant_id=demo_id, customer_id=johnson.customer_id, service_id=standard.service_id,
            title='Weekly House Cleaning - Johnson Residence',
            description='Regular weekly cleaning service',
            status='scheduled',
            scheduled_date=next_week, scheduled_time_start=time(9, 0), scheduled_time_end=time(11, 0),
            quoted_amount=120,
            created_at=now - timedelta(minutes=1),
        ),
    ])

    db.session.add_all([
        Transaction(
            tenant_id=demo_id, customer_id=johnson.customer_id, type='invoice', amount=120,
            description='Weekly House Cleaning - Johnson Residence',
            transaction_date=yesterday, status='paid',
        ),
        Transaction(
            tenant_id=demo_id, customer_id=johnson.customer_id, type='payment', amount=120,
            description='Payment for weekly cleaning service',
            transaction_date=yesterday, status='completed',
        ),
        Transaction(
            tenant_id=demo_id, customer_id=smith.customer_id, type='invoice', amount=200,
            description='Office Cleaning - Smith Corp',
            transaction_date=today, due_date=today + timedelta(days=30), status='sent',
        ),
    ])

    for template in BUSINESS_TEMPLATES:
        db.session.add(BusinessTemplate(is_default=True, **template))

    return tenants


def register_commands(app):

    @app.cli.command('seed-demo')
    def seed_demo_command():
        """Replace all data with the demo tenants."""
        try:
            clear_demo_data()
            seed_demo_data()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        click.echo('✅ Demo data seeded successfully')
        click.echo(f'   Login: admin@demo.com / {DEMO_PASSWORD}')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.argument('password')
    @click.option('--subdomain', required=True, help='Tenant the user joins')
    @click.option('--first-name', default=None)
    @click.option('--last-name', default=None)
    @click.option('--role', type=click.Choice(['admin', 'manager', 'user']), default='user', show_default=True)
    def create_user_command(email, password, subdomain, first_name, last_name, role):
        """Add a user to an existing tenant."""
        subdomain = normalize_subdomain(subdomain)
        tenant = Tenant.query.filter_by(subdomain=subdomain).first()
        if tenant is None:
            raise click.ClickException(f"Tenant '{subdomain}' not found")

        if User.query.filter_by(tenant_id=tenant.tenant_id, email=email).first():
            raise click.ClickException(f"{email} already exists in '{subdomain}'")

        user = User(
            tenant_id=tenant.tenant_id,
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        click.echo(f'✅ Created {role} {email} in {tenant.name} ({user.user_id})')
