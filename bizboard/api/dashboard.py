from datetime import date, datetime, timedelta

from flask import Blueprint, jsonify, current_app, g, request
from sqlalchemy import func

from bizboard.extensions import db
from bizboard.middleware.auth import auth_required
from bizboard.models.customer import Customer
from bizboard.models.job import Job, PENDING_STATUSES
from bizboard.models.service import Service
from bizboard.models.transaction import Transaction

bp = Blueprint('dashboard', __name__)

GROWTH_WINDOW_DAYS = 30
REVENUE_CHART_MONTHS = 6
RECENT_JOBS_DEFAULT = 10
RECENT_JOBS_MAX = 50
CHART_COLOR = '#3b82f6'


@bp.before_request
@auth_required
def require_login():
    """Every dashboard route needs an authenticated user."""
    return None


def _completed_payments(tenant_id):
    return (
        db.session.query(Transaction)
        .filter(Transaction.tenant_id == tenant_id)
        .filter(Transaction.type == 'payment')
        .filter(Transaction.status == 'completed')
    )


def _revenue_between(tenant_id, start=None, end=None):
    query = _completed_payments(tenant_id).with_entities(
        func.coalesce(func.sum(Transaction.amount), 0)
    )
    if start is not None:
        query = query.filter(Transaction.transaction_date >= start)
    if end is not None:
        query = query.filter(Transaction.transaction_date < end)
    return float(query.scalar() or 0)


def _customers_between(tenant_id, start, end=None):
    query = Customer.query.filter(
        Customer.tenant_id == tenant_id,
        Customer.created_at >= start,
    )
    if end is not None:
        query = query.filter(Customer.created_at < end)
    return query.count()


def growth_percentage(current, previous):
    """
    Percentage change of current over previous, rounded to 2 decimals.

    0.0 when both are zero, 100.0 when only the current window has activity.
    """
    if not previous:
        return 100.0 if current else 0.0
    return round((current - previous) / previous * 100, 2)


def months_ago(day, months):
    """Same day-of-month `months` calendar months earlier, clamped to month end."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # Last day of the target month
    if month == 12:
        last_day = 31
    else:
        last_day = (date(year, month + 1, 1) - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))


def _month_bucket(column):
    """Truncate a date column to its month, per SQL dialect."""
    if db.engine.dialect.name == 'postgresql':
        return func.date_trunc('month', column)
    return func.strftime('%Y-%m-01', column)


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()


@bp.route('/stats', methods=['GET'])
def get_dashboard_stats():
    """
    Dashboard Statistics Endpoint

    Returns aggregated statistics for the current tenant:
    - Total revenue (completed payments)
    - Total customers
    - Total / completed / pending jobs
    - Revenue and customer growth: last 30 days against the 30 days before
    """
    tenant_id = g.tenant.tenant_id

    current_app.logger.debug("Dashboard: Fetching stats for tenant_id=%s", tenant_id)

    total_revenue = _revenue_between(tenant_id)

    total_customers = Customer.query.filter_by(tenant_id=tenant_id).count()
    total_jobs = Job.query.filter_by(tenant_id=tenant_id).count()
    completed_jobs = Job.query.filter_by(tenant_id=tenant_id, status='completed').count()
    pending_jobs = Job.query.filter(
        Job.tenant_id == tenant_id,
        Job.status.in_(PENDING_STATUSES)
    ).count()

    today = datetime.utcnow().date()
    window_start = today - timedelta(days=GROWTH_WINDOW_DAYS)
    previous_start = window_start - timedelta(days=GROWTH_WINDOW_DAYS)
    tomorrow = today + timedelta(days=1)

    revenue_growth = growth_percentage(
        _revenue_between(tenant_id, window_start, tomorrow),
        _revenue_between(tenant_id, previous_start, window_start),
    )

    window_start_dt = datetime.combine(window_start, datetime.min.time())
    previous_start_dt = datetime.combine(previous_start, datetime.min.time())
    customer_growth = growth_percentage(
        _customers_between(tenant_id, window_start_dt),
        _customers_between(tenant_id, previous_start_dt, window_start_dt),
    )

    stats = {
        "totalRevenue": total_revenue,
        "totalCustomers": total_customers,
        "totalJobs": total_jobs,
        "completedJobs": completed_jobs,
        "pendingJobs": pending_jobs,
        "revenueGrowth": revenue_growth,
        "customerGrowth": customer_growth,
    }

    current_app.logger.info("Dashboard: Stats retrieved for tenant_id=%s", tenant_id)

    return jsonify({"success": True, "data": stats}), 200


@bp.route('/recent-jobs', methods=['GET'])
def get_recent_jobs():
    """Newest jobs for the tenant with customer and service names."""
    tenant_id = g.tenant.tenant_id

    limit = request.args.get('limit', RECENT_JOBS_DEFAULT, type=int)
    limit = max(1, min(limit, RECENT_JOBS_MAX))

    rows = (
        db.session.query(Job, Customer.name, Service.name)
        .outerjoin(Customer, Job.customer_id == Customer.customer_id)
        .outerjoin(Service, Job.service_id == Service.service_id)
        .filter(Job.tenant_id == tenant_id)
        .order_by(Job.created_at.desc())
        .limit(limit)
        .all()
    )

    jobs = [
        job.to_dict(customer_name=customer_name, service_name=service_name)
        for job, customer_name, service_name in rows
    ]

    current_app.logger.debug("Dashboard: %d recent jobs for tenant_id=%s", len(jobs), tenant_id)

    return jsonify({"success": True, "data": jobs}), 200


@bp.route('/revenue-chart', methods=['GET'])
def get_revenue_chart():
    """Completed payments of the last six months, summed per calendar month."""
    tenant_id = g.tenant.tenant_id
    since = months_ago(datetime.utcnow().date(), REVENUE_CHART_MONTHS)

    month = _month_bucket(Transaction.transaction_date).label('month')
    rows = (
        _completed_payments(tenant_id)
        .filter(Transaction.transaction_date >= since)
        .with_entities(month, func.sum(Transaction.amount).label('revenue'))
        .group_by(month)
        .order_by(month)
        .all()
    )

    labels = [_as_date(row.month).strftime('%b %Y') for row in rows]
    data = [float(row.revenue or 0) for row in rows]

    chart = {
        "labels": labels,
        "datasets": [
            {
                "label": "Revenue",
                "data": data,
                "backgroundColor": CHART_COLOR,
                "borderColor": CHART_COLOR,
                "fill": False,
            }
        ]
    }

    return jsonify({"success": True, "data": chart}), 200
