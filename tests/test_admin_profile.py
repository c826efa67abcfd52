"""
Tests for profile editing in the admin dashboard.
"""

from conftest import hidden_values
from models import Profile


PROFILE_FORM = {
    'name': 'Ada Lovelace',
    'title': 'Engineer',
    'short_bio_en': 'Writes engines',
    'short_bio_fr': 'Écrit des moteurs',
    'years_experience': '8',
    'projects_count': '30',
}


def profiles(app):
    with app.app_context():
        return Profile.query.all()


class TestProfile:
    """Tests for the single-profile editor."""

    def test_empty_form(self, auth_client):
        response = auth_client.get('/admin/profile')

        assert response.status_code == 200
        assert 'Save profile' in response.get_data(as_text=True)

    def test_save_is_the_first_submit_button(self, auth_client):
        html = auth_client.get('/admin/profile').get_data(as_text=True)
        form = html[html.index('class="admin-form"'):]

        assert form.index('type="submit"') == form.index('type="submit" name="action" value="save"')
        assert form.index('value="save"') < form.index('value="upload"')

    def test_create_then_update_keeps_one_row(self, app, auth_client, owner_id):
        assert auth_client.post('/admin/profile', data=PROFILE_FORM).status_code == 302
        assert auth_client.post('/admin/profile', data=dict(PROFILE_FORM, title='Architect')).status_code == 302

        rows = profiles(app)
        assert len(rows) == 1
        assert rows[0].user_id == owner_id
        assert rows[0].title == 'Architect'
        assert rows[0].years_experience == 8

    def test_saved_profile_shows_on_home(self, auth_client):
        auth_client.post('/admin/profile', data=PROFILE_FORM)

        html = auth_client.get('/').get_data(as_text=True)

        assert 'Writes engines' in html
        assert '8+' in html

    def test_missing_name(self, app, auth_client):
        response = auth_client.post('/admin/profile', data=dict(PROFILE_FORM, name=''))

        assert response.status_code == 400
        assert 'Name and short bio (English) are required' in response.get_data(as_text=True)
        assert profiles(app) == []

    def test_bad_counts(self, auth_client):
        response = auth_client.post('/admin/profile', data=dict(PROFILE_FORM, years_experience='lots'))

        assert response.status_code == 400
        assert 'must be whole numbers' in response.get_data(as_text=True)

    def test_cv_upload_then_save(self, app, auth_client, upload):
        data = dict(PROFILE_FORM, action='upload', cv_en_file=upload('cv.pdf', b'%PDF'))

        response = auth_client.post('/admin/profile', data=data, content_type='multipart/form-data')
        cv_en = hidden_values(response, 'cv_en')

        assert response.status_code == 200
        assert cv_en[0].startswith('/storage/cvs/')
        assert profiles(app) == []

        auth_client.post('/admin/profile', data=dict(PROFILE_FORM, cv_en=cv_en[0]))

        assert profiles(app)[0].cv_en == cv_en[0]
        assert auth_client.get('/cv/en').headers['Location'].endswith(cv_en[0])

    def test_image_uploaded_on_save(self, app, auth_client, upload):
        data = dict(PROFILE_FORM, profile_image_file=upload('me.jpg'))

        response = auth_client.post('/admin/profile', data=data, content_type='multipart/form-data')

        assert response.status_code == 302
        assert profiles(app)[0].profile_image.startswith('/storage/profile-images/')

    def test_cv_must_be_a_document(self, auth_client, upload):
        data = dict(PROFILE_FORM, action='upload', cv_fr_file=upload('cv.png'))

        response = auth_client.post('/admin/profile', data=data, content_type='multipart/form-data')

        assert response.status_code == 400
