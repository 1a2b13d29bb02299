"""
Shared fixtures.

FakeBackend stands in for the REST backend: every BackendClient method the
pages use is answered from in-memory lists and recorded in ``calls`` so tests
can assert what went over the wire (and what never did).
"""
from typing import Any, Dict, List, Optional

import pytest

from job_portal.app import create_app
from job_portal.config import Settings
from job_portal.errors import BackendError
from job_portal.models import (
    Application,
    JobPosting,
    JobSeekerProfile,
    RecruiterProfile,
    SavedResume,
)

SEEKER_TOKEN = 'tok-user'
RECRUITER_TOKEN = 'tok-recruiter'

JOBS = [
    {
        '_id': 'j1', 'title': 'Backend Engineer', 'company': {'name': 'Acme'},
        'location': 'Remote', 'country': 'IN', 'state': 'Karnataka', 'city': 'Bengaluru',
        'type': 'full-time', 'experience': {'min': 2, 'max': 5}, 'requirements': ['python', 'flask'],
    },
    {
        '_id': 'j2', 'title': 'Data Analyst', 'company': {'name': 'Globex'},
        'country': 'US', 'state': 'CA', 'city': 'SF',
        'type': 'part-time', 'experience': {'min': 0, 'max': 2}, 'requirements': ['sql'],
    },
    {
        '_id': 'j3', 'title': 'ML Intern', 'company': {'name': 'Initech'},
        'country': 'IN', 'state': 'Maharashtra', 'city': 'Pune',
        'type': 'internship', 'experience': {'min': 0, 'max': 1},
    },
]


def make_jobs(rows: Optional[List[Dict[str, Any]]] = None) -> List[JobPosting]:
    return [JobPosting.from_dict(r) for r in (JOBS if rows is None else rows)]


class FakeClient:
    def __init__(self, backend: 'FakeBackend', token: Optional[str]):
        self.backend = backend
        self.token = token
        self.closed = False

    def close(self):
        self.closed = True

    def _call(self, name: str, *args, **kwargs):
        self.backend.calls.append((name, args, kwargs))
        err = self.backend.errors.get(name)
        if err is not None:
            raise err

    def login(self, email, password, role):
        self._call('login', email, password, role)
        return f'tok-{role}'

    def signup(self, name, email, password, role):
        self._call('signup', name, email, password, role)
        return 'Account created'

    def forgot_password(self, email, role):
        self._call('forgot_password', email, role)
        return 'OTP sent to your email'

    def reset_password(self, email, otp, new_password):
        self._call('reset_password', email, otp, new_password)
        return 'Password reset successfully'

    def get_profile(self, role=None):
        self._call('get_profile', role=role)
        profile = self.backend.profiles.get(self.token)
        if profile is None:
            raise BackendError('Invalid or expired token', status_code=401)
        return profile

    def update_profile(self, fields, image=None):
        self._call('update_profile', fields, image=image)
        return 'Profile updated successfully'

    def list_jobs(self, **params):
        self._call('list_jobs', **params)
        return list(self.backend.jobs)

    def get_job(self, job_id):
        self._call('get_job', job_id)
        for job in self.backend.jobs:
            if job.id == job_id:
                return job
        raise BackendError('Job not found', status_code=404)

    def delete_job(self, job_id):
        self._call('delete_job', job_id)
        self.backend.jobs = [j for j in self.backend.jobs if j.id != job_id]

    def create_job(self, job):
        self._call('create_job', job)
        posted = JobPosting.from_dict({**job, '_id': f'j{len(self.backend.jobs) + 1}'})
        self.backend.jobs.append(posted)
        return posted

    def apply(self, job_id, resume_file=None, resume_url=None):
        self._call('apply', job_id, resume_file=resume_file, resume_url=resume_url)
        return 'Application submitted successfully!'

    def list_resumes(self):
        self._call('list_resumes')
        return list(self.backend.resumes)

    def delete_resume(self, resume_id):
        self._call('delete_resume', resume_id)
        self.backend.resumes = [r for r in self.backend.resumes if r.id != resume_id]

    def list_applicants(self, job_id):
        self._call('list_applicants', job_id)
        return list(self.backend.applications)

    def get_applicant(self, user_id):
        self._call('get_applicant', user_id)
        for a in self.backend.applications:
            if a.applicant.id == user_id:
                return a.applicant
        raise BackendError('Applicant not found', status_code=404)


class FakeBackend:
    def __init__(self):
        self.calls: List[tuple] = []
        self.errors: Dict[str, Exception] = {}
        self.jobs = make_jobs()
        self.profiles = {
            SEEKER_TOKEN: JobSeekerProfile(id='u1', name='Asha', email='asha@example.com', address='Pune',
                                           skills=['python']),
            RECRUITER_TOKEN: RecruiterProfile(id='r1', name='Ravi', email='ravi@acme.test', company_name='Acme',
                                              company_address='Bengaluru', industry='Software'),
        }
        self.resumes = [SavedResume(id='res1', url='https://files.test/asha.pdf', name='asha.pdf')]
        self.applications = [Application.from_dict({
            '_id': 'a1', 'job': 'j1', 'resume': 'https://files.test/asha.pdf', 'status': 'pending',
            'applicant': {'_id': 'u1', 'name': 'Asha', 'email': 'asha@example.com',
                          'profile': {'skills': ['python', 'sql']}},
        })]
        self.clients: List[FakeClient] = []

    def client(self, token: Optional[str]) -> FakeClient:
        c = FakeClient(self, token)
        self.clients.append(c)
        return c

    def called(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]


class FakeGeo:
    def countries(self):
        return [{'code': 'IN', 'name': 'India'}, {'code': 'US', 'name': 'United States'}]

    def states(self, country):
        return {'IN': ['Karnataka', 'Maharashtra'], 'US': ['CA', 'NY']}.get(country, [])

    def cities(self, country, state):
        return {'Karnataka': ['Bengaluru', 'Mysuru']}.get(state, [])


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    app = create_app(Settings(secret_key='test-secret'), client_factory=backend.client, geo=FakeGeo())
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def login_as(client, role: str):
    with client.session_transaction() as sess:
        sess['token'] = f'tok-{role}'
        sess['role'] = role


@pytest.fixture
def seeker(client):
    login_as(client, 'user')
    return client


@pytest.fixture
def recruiter(client):
    login_as(client, 'recruiter')
    return client
