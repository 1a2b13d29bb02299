import io
import logging

from PyPDF2 import PdfWriter

from job_portal.app import create_app
from job_portal.config import Settings
from job_portal.errors import BackendError, TransportError

from conftest import FakeGeo


def _pdf_upload():
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    buf.seek(0)
    return buf, 'resume.pdf', 'application/pdf'


def test_healthz_skips_backend(client, backend):
    r = client.get('/healthz')
    assert r.get_json() == {'ok': True}
    assert backend.calls == []


def test_jobs_redirects_to_login_when_logged_out(client):
    r = client.get('/jobs')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']


def test_stale_token_is_cleared_and_redirected(client):
    with client.session_transaction() as sess:
        sess['token'] = 'stale'
        sess['role'] = 'user'
    r = client.get('/jobs')
    assert r.status_code == 302
    with client.session_transaction() as sess:
        assert 'token' not in sess and 'role' not in sess


def test_login_flow(client, backend):
    r = client.post('/login', data={'email': 'asha@example.com', 'password': 'pw', 'role': 'user'})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/jobs')
    with client.session_transaction() as sess:
        assert sess['token'] == 'tok-user'
        assert sess['role'] == 'user'
    assert backend.called('login')[0][1] == ('asha@example.com', 'pw', 'user')


def test_login_failure_shows_message(client, backend):
    backend.errors['login'] = BackendError('Invalid credentials', status_code=401)
    r = client.post('/login', data={'email': 'a@b.c', 'password': 'bad', 'role': 'user'})
    assert r.status_code == 400
    assert b'Invalid credentials' in r.data
    with client.session_transaction() as sess:
        assert 'token' not in sess


def test_login_follows_safe_next_only(client):
    data = {'email': 'a@b.c', 'password': 'pw', 'role': 'user'}
    r = client.post('/login', data={**data, 'next': '/profile'})
    assert r.headers['Location'].endswith('/profile')
    client.post('/logout')
    r = client.post('/login', data={**data, 'next': '//evil.test/'})
    assert r.headers['Location'].endswith('/jobs')


def test_logout_clears_session(seeker):
    seeker.post('/logout')
    with seeker.session_transaction() as sess:
        assert 'token' not in sess


def test_signup_password_mismatch_makes_no_call(client, backend):
    r = client.post('/signup', data={'name': 'A', 'email': 'a@b.c', 'password': 'x',
                                     'confirm_password': 'y', 'role': 'user'})
    assert r.status_code == 400
    assert backend.called('signup') == []


def test_signup_redirects_to_login(client, backend):
    r = client.post('/signup', data={'name': 'A', 'email': 'a@b.c', 'password': 'x',
                                     'confirm_password': 'x', 'role': 'recruiter'})
    assert r.status_code == 302
    assert backend.called('signup')[0][1] == ('A', 'a@b.c', 'x', 'recruiter')


def test_jobs_list_applies_facets(seeker):
    r = seeker.get('/jobs?type=part-time')
    body = r.get_data(as_text=True)
    assert r.status_code == 200
    assert 'Data Analyst' in body
    assert 'Backend Engineer' not in body


def test_jobs_list_sends_backend_params(seeker, backend):
    seeker.get('/jobs?location=Remote&q=acme')
    assert backend.called('list_jobs')[-1][2] == {'location': 'Remote'}


def test_jobs_list_failure_is_shown(seeker, backend):
    backend.errors['list_jobs'] = TransportError('Could not reach the job portal service.')
    r = seeker.get('/jobs')
    assert b'Could not reach the job portal service.' in r.data


def test_seeker_cannot_delete_jobs(seeker, backend):
    r = seeker.post('/jobs/j1/delete')
    assert r.status_code == 302
    assert backend.called('delete_job') == []


def test_recruiter_deletes_job(recruiter, backend):
    r = recruiter.post('/jobs/j1/delete', data={'next': '/jobs?type=full-time'})
    assert r.headers['Location'].endswith('/jobs?type=full-time')
    assert [j.id for j in backend.jobs] == ['j2', 'j3']


def test_job_detail_shows_apply_for_seeker(seeker):
    body = seeker.get('/jobs/j1').get_data(as_text=True)
    assert 'Apply Now' in body
    assert 'python' in body


def test_missing_job_is_404(seeker):
    assert seeker.get('/jobs/nope').status_code == 404


def test_apply_with_upload(seeker, backend):
    r = seeker.post('/jobs/j1/apply', data={'resume': _pdf_upload()}, content_type='multipart/form-data')
    assert r.status_code == 302
    call = backend.called('apply')[0]
    assert call[1] == ('j1',)
    assert call[2]['resume_file'][0] == 'resume.pdf'
    assert call[2]['resume_url'] is None


def test_apply_with_saved_resume(seeker, backend):
    seeker.post('/jobs/j1/apply', data={'resume_url': 'https://files.test/asha.pdf'})
    assert backend.called('apply')[0][2]['resume_url'] == 'https://files.test/asha.pdf'


def test_apply_rejects_non_pdf_before_network(seeker, backend):
    r = seeker.post('/jobs/j1/apply', data={'resume': (io.BytesIO(b'not a pdf'), 'cv.pdf', 'application/pdf')},
                    content_type='multipart/form-data')
    assert r.status_code == 400
    assert backend.called('apply') == []


def test_apply_missing_information_redirects_to_profile(seeker, backend):
    backend.errors['apply'] = BackendError('Missing information in profile')
    r = seeker.post('/jobs/j1/apply', data={'resume_url': 'https://files.test/asha.pdf'})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/profile')


def test_recruiter_cannot_apply(recruiter):
    r = recruiter.get('/jobs/j1/apply')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']


def test_delete_saved_resume(seeker, backend):
    seeker.post('/resumes/res1/delete', data={'next': '/jobs/j1/apply'})
    assert backend.resumes == []


def test_applicants_page(recruiter):
    body = recruiter.get('/jobs/j1/applicants').get_data(as_text=True)
    assert 'Asha' in body
    assert 'pending' in body
    assert recruiter.get('/applicants/u1').status_code == 200


def test_post_job_validation_and_success(recruiter, backend):
    r = recruiter.post('/post-job', data={'title': '', 'description': 'x'})
    assert r.status_code == 400
    assert backend.called('create_job') == []

    r = recruiter.post('/post-job', data={
        'title': 'SRE', 'description': 'Keep it up', 'type': 'contract', 'country': 'IN',
        'state': 'Karnataka', 'city': 'Bengaluru', 'experience_min': '1', 'experience_max': '3',
    })
    assert r.status_code == 302
    assert backend.called('create_job')[0][1][0]['title'] == 'SRE'


def test_profile_shows_completion(seeker):
    body = seeker.get('/profile').get_data(as_text=True)
    assert 'Profile Completion' in body
    assert 'Profile Image' in body


def test_profile_edit_add_row_does_not_save(seeker, backend):
    r = seeker.post('/profile/edit', data={'name': 'Asha', 'address': 'Pune', 'intent': 'add-education'})
    assert r.status_code == 200
    assert 'education-0-institution' in r.get_data(as_text=True)
    assert backend.called('update_profile') == []


def test_profile_edit_saves(seeker, backend):
    r = seeker.post('/profile/edit', data={'name': 'Asha', 'address': 'Pune', 'skills': 'python', 'intent': 'save'})
    assert r.status_code == 302
    fields = backend.called('update_profile')[0][1][0]
    assert fields['name'] == 'Asha'


def test_forgot_password_dialog_steps(client, backend):
    client.post('/forgot-password/open')
    r = client.post('/forgot-password/request-otp', data={'email': 'asha@example.com', 'role': 'user'})
    assert r.status_code == 302
    page = client.get('/login').get_data(as_text=True)
    assert 'Enter the code sent to' in page

    client.post('/forgot-password/reset', data={'otp': '1', 'new_password': 'a', 'confirm_password': 'b'})
    assert backend.called('reset_password') == []

    client.post('/forgot-password/reset', data={'otp': '1', 'new_password': 'a', 'confirm_password': 'a'})
    assert backend.called('reset_password')[0][1] == ('asha@example.com', '1', 'a')
    with client.session_transaction() as sess:
        assert 'forgot_password' not in sess


def test_geo_json(recruiter):
    assert recruiter.get('/geo/states?country=IN').get_json() == {'ok': True, 'items': ['Karnataka', 'Maharashtra']}


def test_geo_json_requires_login(client):
    r = client.get('/geo/countries')
    assert r.status_code == 401
    assert r.get_json()['ok'] is False


def test_login_rejects_unknown_role_before_network(client, backend):
    r = client.post('/login', data={'email': 'a@b.c', 'password': 'pw', 'role': 'admin'})
    assert r.status_code == 400
    assert backend.called('login') == []


def test_jobs_list_ignores_non_finite_experience(seeker):
    r = seeker.get('/jobs?experience_max=1e999&experience_min=inf')
    assert r.status_code == 200
    assert 'Backend Engineer' in r.get_data(as_text=True)


def test_jobs_list_sends_type_and_experience(seeker, backend):
    seeker.get('/jobs?type=part-time&experience_min=0')
    assert backend.called('list_jobs')[-1][2] == {'type': 'part-time', 'experience': '0'}


def test_delete_form_returns_to_current_filters(recruiter):
    body = recruiter.get('/jobs?type=full-time').get_data(as_text=True)
    assert 'name="next" value="/jobs?type=full-time"' in body
    assert '>Reset</a>' in body


def test_unfiltered_list_has_no_reset_link(seeker):
    assert '>Reset</a>' not in seeker.get('/jobs').get_data(as_text=True)


def test_configured_log_level_is_applied(backend):
    root = logging.getLogger()
    before = root.level
    try:
        create_app(Settings(secret_key='k', log_level='WARNING'), client_factory=backend.client, geo=FakeGeo())
        assert root.level == logging.WARNING
    finally:
        root.setLevel(before)
