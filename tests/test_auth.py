"""
Tests for operator sign-in and the create-admin command.
"""

from models import User
from utils.security import verify_password


class TestLogin:
    def test_login_page(self, client):
        response = client.get('/admin')

        assert response.status_code == 200
        assert 'Sign in' in response.get_data(as_text=True)

    def test_configured_operator_is_provisioned_on_first_login(self, app, client):
        response = client.post('/admin', data={'email': 'Owner@Example.com', 'password': 'owner-password'})

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admin/dashboard')
        with app.app_context():
            user = User.query.one()
            assert user.email == 'owner@example.com'
            assert verify_password('owner-password', user.password_hash)

    def test_wrong_password(self, app, client):
        response = client.post('/admin', data={'email': 'owner@example.com', 'password': 'nope'})

        assert response.status_code == 401
        assert 'Invalid credentials' in response.get_data(as_text=True)
        with app.app_context():
            assert User.query.count() == 0

    def test_existing_user_checks_stored_hash(self, client, owner_id):
        response = client.post('/admin', data={'email': 'owner@example.com', 'password': 'wrong'})

        assert response.status_code == 401

    def test_signed_in_operator_skips_login(self, auth_client):
        response = auth_client.get('/admin')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admin/dashboard')

    def test_logout(self, auth_client):
        response = auth_client.post('/admin/logout')

        assert response.status_code == 302
        assert auth_client.get('/admin/dashboard').status_code == 302


class TestDashboard:
    def test_overview(self, auth_client, owner_id, make_project):
        make_project(owner_id, title='Listed')
        make_project(owner_id, title='Hidden one', is_visible=False)

        html = auth_client.get('/admin/dashboard').get_data(as_text=True)

        assert 'Listed' in html
        assert 'Hidden one</a> (hidden)' in html


class TestCreateAdminCommand:
    def test_create_and_reset(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['create-admin', 'New@Example.com'], input='secret\nsecret\n')
        assert 'Operator new@example.com created' in result.output

        result = runner.invoke(args=['create-admin', 'new@example.com'], input='other\nother\n')
        assert 'Operator new@example.com updated' in result.output

        with app.app_context():
            user = User.query.filter_by(email='new@example.com').one()
            assert verify_password('other', user.password_hash)
