from bizboard.cli import DEMO_PASSWORD, seed_demo_data
from bizboard.extensions import db
from bizboard.models import BusinessTemplate, Customer, Job, Tenant, Transaction, User


def test_seed_demo_command(app, client):
    result = app.test_cli_runner().invoke(args=['seed-demo'])

    assert result.exit_code == 0, result.output
    assert 'Demo data seeded' in result.output
    assert {t.subdomain for t in Tenant.query.all()} == {'demo', 'greenscape', 'hvacpro'}
    assert BusinessTemplate.query.count() == 3

    response = client.post('/api/auth/login', json={"email": "admin@demo.com", "password": DEMO_PASSWORD})
    assert response.status_code == 200
    token = response.get_json()['data']['token']

    stats = client.get('/api/dashboard/stats', headers={'Authorization': f'Bearer {token}'}).get_json()['data']
    assert stats['totalRevenue'] == 120.0
    assert stats['totalCustomers'] == 3
    assert stats['totalJobs'] == 4
    assert stats['completedJobs'] == 1
    assert stats['pendingJobs'] == 3


def test_seed_demo_is_repeatable(app):
    runner = app.test_cli_runner()

    runner.invoke(args=['seed-demo'])
    result = runner.invoke(args=['seed-demo'])

    assert result.exit_code == 0, result.output
    assert Tenant.query.count() == 3
    assert User.query.count() == 4


def test_seeded_jobs_have_distinct_creation_times(app):
    tenants = seed_demo_data()
    db.session.commit()

    demo_id = tenants['demo'].tenant_id
    jobs = Job.query.filter_by(tenant_id=demo_id).order_by(Job.created_at.desc()).all()
    assert len({job.created_at for job in jobs}) == 4
    assert Customer.query.filter_by(tenant_id=demo_id).count() == 3
    assert Transaction.query.filter_by(tenant_id=demo_id, type='payment').count() == 1


def test_create_user_command(app, demo_tenant):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['create-user', 'staff@demo.com', 'secret123',
                                 '--subdomain', 'demo', '--role', 'manager'])

    assert result.exit_code == 0, result.output
    user = User.query.filter_by(email='staff@demo.com').one()
    assert user.role == 'manager'
    assert user.tenant_id == demo_tenant.tenant_id

    duplicate = runner.invoke(args=['create-user', 'staff@demo.com', 'secret123', '--subdomain', 'demo'])
    assert duplicate.exit_code != 0
    assert 'already exists' in duplicate.output

    missing = runner.invoke(args=['create-user', 'x@y.com', 'secret123', '--subdomain', 'nope'])
    assert missing.exit_code != 0
    assert "Tenant 'nope' not found" in missing.output
