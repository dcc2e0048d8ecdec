from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from bizboard.extensions import db
from bizboard.models import Customer, Job, Service, Tenant, Transaction, User


def test_subdomain_is_unique(make_tenant):
    make_tenant('acme')

    db.session.add(Tenant(name='Other Acme', subdomain='acme', business_type='hvac', settings={}))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_email_is_unique_per_tenant_only(make_tenant, make_user):
    acme = make_tenant('acme')
    globex = make_tenant('globex')
    make_user(acme, 'owner@example.com')

    # Same email in another tenant is fine
    make_user(globex, 'owner@example.com')

    db.session.add(User(tenant_id=acme.tenant_id, email='owner@example.com', password_hash='x'))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()

    assert User.query.filter_by(email='owner@example.com').count() == 2


def test_deleting_tenant_removes_its_rows(make_tenant, make_user):
    acme = make_tenant('acme')
    other = make_tenant('other')
    make_user(acme, 'a@acme.com')
    make_user(other, 'b@other.com')

    customer = Customer(tenant_id=acme.tenant_id, name='Jane')
    service = Service(tenant_id=acme.tenant_id, name='Deep Cleaning', base_price=250)
    db.session.add_all([customer, service])
    db.session.flush()
    job = Job(tenant_id=acme.tenant_id, customer_id=customer.customer_id,
              service_id=service.service_id, title='Clean')
    db.session.add(job)
    db.session.flush()
    db.session.add(Transaction(tenant_id=acme.tenant_id, customer_id=customer.customer_id,
                               job_id=job.job_id, type='payment', amount=250,
                               transaction_date=date.today(), status='completed'))
    db.session.commit()

    acme_id = acme.tenant_id
    db.session.delete(acme)
    db.session.commit()
    db.session.expire_all()

    for model in (User, Customer, Service, Job, Transaction):
        assert model.query.filter_by(tenant_id=acme_id).count() == 0
    assert User.query.filter_by(tenant_id=other.tenant_id).count() == 1


def test_job_to_dict_uses_camel_case_and_float_amounts(demo_tenant):
    customer = Customer(tenant_id=demo_tenant.tenant_id, name='Jane')
    db.session.add(customer)
    db.session.flush()
    job = Job(tenant_id=demo_tenant.tenant_id, customer_id=customer.customer_id, title='Clean',
              scheduled_date=date(2026, 5, 4), quoted_amount=120)
    db.session.add(job)
    db.session.commit()

    data = job.to_dict(customer_name='Jane', service_name=None)

    assert data['id'] == job.job_id
    assert data['customerName'] == 'Jane'
    assert data['serviceName'] is None
    assert data['status'] == 'scheduled'
    assert data['scheduledDate'] == '2026-05-04'
    assert data['quotedAmount'] == 120.0
    assert data['finalAmount'] is None
    assert data['metadata'] == {}
