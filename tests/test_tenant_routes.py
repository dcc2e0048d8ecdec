from bizboard.extensions import db
from bizboard.models import BusinessTemplate, Tenant


def test_anonymous_caller_gets_public_fields(client, demo_tenant):
    response = client.get('/api/tenant')

    data = response.get_json()['data']
    assert data['id'] == demo_tenant.tenant_id
    assert data['businessType'] == 'cleaning'
    assert 'settings' not in data


def test_member_also_gets_settings(client, demo_admin, auth_headers):
    response = client.get('/api/tenant', headers=auth_headers(demo_admin))

    assert response.status_code == 200
    assert response.get_json()['data']['settings'] == {"currency": "USD"}


def test_foreign_token_is_treated_as_anonymous(client, demo_tenant, make_tenant, make_user, auth_headers):
    acme_admin = make_user(make_tenant('acme'), 'admin@acme.com')

    response = client.get('/api/tenant', headers=auth_headers(acme_admin))

    assert response.status_code == 200
    assert 'settings' not in response.get_json()['data']


def test_template_for_business_type(client, demo_tenant):
    db.session.add_all([
        BusinessTemplate(business_type='cleaning', template_name='Alt', config={"widgets": []}),
        BusinessTemplate(business_type='cleaning', template_name='Standard Cleaning Dashboard',
                         config={"widgets": [{"type": "recent_jobs"}], "kpis": []}, is_default=True),
        BusinessTemplate(business_type='hvac', template_name='HVAC', config={}, is_default=True),
    ])
    db.session.commit()

    response = client.get('/api/tenant/template')

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['templateName'] == 'Standard Cleaning Dashboard'
    assert data['isDefault'] is True
    assert data['config']['widgets'] == [{"type": "recent_jobs"}]


def test_missing_template_is_404(client, demo_tenant):
    response = client.get('/api/tenant/template')

    assert response.status_code == 404
    assert response.get_json()['error'] == 'No template for business type'


class TestTenantUsers:

    def test_manager_lists_users_of_own_tenant(self, client, demo_tenant, demo_admin, make_user,
                                                make_tenant, auth_headers):
        manager = make_user(demo_tenant, 'manager@demo.com', role='manager')
        make_user(make_tenant('acme'), 'admin@acme.com')

        response = client.get('/api/tenant/users', headers=auth_headers(manager))

        assert response.status_code == 200
        emails = {user['email'] for user in response.get_json()['data']}
        assert emails == {'admin@demo.com', 'manager@demo.com'}

    def test_plain_user_is_forbidden(self, client, demo_tenant, make_user, auth_headers):
        user = make_user(demo_tenant, 'staff@demo.com', role='user')

        response = client.get('/api/tenant/users', headers=auth_headers(user))

        assert response.status_code == 403
        assert response.get_json()['error'] == 'Access denied. Required role: admin or manager'

    def test_token_for_other_tenant_is_403(self, client, demo_tenant, make_tenant, make_user, auth_headers):
        acme_admin = make_user(make_tenant('acme'), 'admin@acme.com')

        response = client.get('/api/tenant/users', headers=auth_headers(acme_admin))

        assert response.status_code == 403
        assert response.get_json()['error'] == 'Token tenant mismatch'

    def test_requires_token(self, client, demo_tenant):
        assert client.get('/api/tenant/users').status_code == 401


class TestTenantSettings:

    def test_admin_merges_settings(self, client, demo_admin, auth_headers):
        response = client.patch('/api/tenant/settings', headers=auth_headers(demo_admin),
                                json={"timezone": "America/Chicago"})

        assert response.status_code == 200
        assert response.get_json()['data']['settings'] == {"currency": "USD", "timezone": "America/Chicago"}
        db.session.expire_all()
        assert Tenant.query.filter_by(subdomain='demo').one().settings['timezone'] == 'America/Chicago'

    def test_manager_is_forbidden(self, client, demo_tenant, make_user, auth_headers):
        manager = make_user(demo_tenant, 'manager@demo.com', role='manager')

        response = client.patch('/api/tenant/settings', headers=auth_headers(manager), json={"a": 1})

        assert response.status_code == 403
        assert response.get_json()['error'] == 'Access denied. Required role: admin'

    def test_body_must_be_object(self, client, demo_admin, auth_headers):
        response = client.patch('/api/tenant/settings', headers=auth_headers(demo_admin), json=[1, 2])

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Settings must be a JSON object'
