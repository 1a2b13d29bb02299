from typing import Any, BinaryIO, Dict, List, Optional, Tuple

import requests

from .errors import BackendError, TransportError, ValidationError
from .log import get_logger
from .models import (
    Application,
    JobPosting,
    JobSeekerProfile,
    Profile,
    SavedResume,
    parse_profile,
)

log = get_logger(__name__)

# (filename, stream, content type) as accepted by requests' ``files=``
Upload = Tuple[str, BinaryIO, str]


def is_success(payload: Dict[str, Any], http_ok: bool = True) -> bool:
    """Read the backend's success discriminator.

    Endpoints answer with either ``success: bool`` or ``status: "success"|"error"``;
    a body carrying neither falls back to the HTTP status.
    """
    if not http_ok:
        return False
    if 'success' in payload:
        return payload.get('success') is True
    if 'status' in payload:
        return str(payload.get('status')).lower() == 'success'
    return True


class BackendClient:
    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 20.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    def headers(self) -> Dict[str, str]:
        if self.token:
            return {'Authorization': f'Bearer {self.token}'}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f'{self.base_url}{path}'
        log.debug('%s %s', method, path)
        try:
            r = self.session.request(method, url, headers=self.headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning('%s %s failed: %s', method, path, e)
            raise TransportError('Could not reach the job portal service. Please try again.') from e

        if not r.content:
            payload: Dict[str, Any] = {}
        else:
            try:
                payload = r.json()
            except ValueError as e:
                log.warning('%s %s returned a non-JSON body (HTTP %s)', method, path, r.status_code)
                raise TransportError('The job portal service returned an unreadable response.') from e
        if not isinstance(payload, dict):
            payload = {'data': payload}

        if not is_success(payload, http_ok=r.ok):
            message = str(payload.get('message') or payload.get('error') or f'Request failed (HTTP {r.status_code})')
            log.warning('%s %s rejected (HTTP %s): %s', method, path, r.status_code, message)
            raise BackendError(message, status_code=r.status_code, payload=payload)
        return payload

    # --- user ---

    def login(self, email: str, password: str, role: str) -> str:
        payload = self._request('POST', '/api/user/login', json={'email': email, 'password': password, 'role': role})
        token = payload.get('token')
        if not token:
            raise BackendError(str(payload.get('message') or 'Login failed'), payload=payload)
        return str(token)

    def signup(self, name: str, email: str, password: str, role: str) -> str:
        payload = self._request('POST', '/api/user/register',
                                json={'name': name, 'email': email, 'password': password, 'role': role})
        return str(payload.get('message') or 'Account created')

    def forgot_password(self, email: str, role: str) -> str:
        payload = self._request('POST', '/api/user/forgot-password', json={'email': email, 'role': role})
        return str(payload.get('message') or 'OTP sent to your email')

    def reset_password(self, email: str, otp: str, new_password: str) -> str:
        payload = self._request('POST', '/api/user/reset-password',
                                json={'email': email, 'otp': otp, 'newPassword': new_password})
        return str(payload.get('message') or 'Password reset successfully')

    def get_profile(self, role: Optional[str] = None) -> Profile:
        payload = self._request('GET', '/api/user/profile')
        data = payload.get('data')
        if not isinstance(data, dict):
            raise BackendError('Profile response carried no data', payload=payload)
        return parse_profile(data, role=role)

    def update_profile(self, fields: Dict[str, str], image: Optional[Upload] = None) -> str:
        # always multipart, even without an image
        files: Dict[str, Any] = {k: (None, v) for k, v in fields.items()}
        if image is not None:
            files['profileImage'] = image
        payload = self._request('PUT', '/api/user/profile', files=files)
        return str(payload.get('message') or 'Profile updated successfully')

    # --- jobs ---

    def list_jobs(self, **params: Optional[str]) -> List[JobPosting]:
        query = {k: v for k, v in params.items() if v}
        payload = self._request('GET', '/api/job/jobs', params=query)
        return [JobPosting.from_dict(j) for j in payload.get('data') or [] if isinstance(j, dict)]

    def get_job(self, job_id: str) -> JobPosting:
        payload = self._request('GET', f'/api/job/jobs/{job_id}')
        data = payload.get('data')
        if not isinstance(data, dict):
            raise BackendError('Job not found', payload=payload)
        return JobPosting.from_dict(data)

    def delete_job(self, job_id: str) -> None:
        self._request('DELETE', f'/api/job/jobs/{job_id}')

    def create_job(self, job: Dict[str, Any]) -> Optional[JobPosting]:
        payload = self._request('POST', '/api/job/jobs', json=job)
        data = payload.get('data')
        return JobPosting.from_dict(data) if isinstance(data, dict) else None

    # --- applications ---

    def apply(self, job_id: str, resume_file: Optional[Upload] = None, resume_url: Optional[str] = None) -> str:
        if (resume_file is None) == (not resume_url):
            raise ValidationError('Choose either a saved resume or a new PDF upload')
        path = f'/api/application/apply/{job_id}'
        if resume_file is not None:
            payload = self._request('POST', path, files={'resume': resume_file})
        else:
            payload = self._request('POST', path, json={'resumeUrl': resume_url})
        return str(payload.get('message') or 'Application submitted successfully!')

    def list_resumes(self) -> List[SavedResume]:
        payload = self._request('GET', '/api/application/resume')
        data = payload.get('data') or []
        if isinstance(data, (dict, str)):
            data = [data]
        return [SavedResume.from_value(r) for r in data if r]

    def delete_resume(self, resume_id: str) -> None:
        self._request('DELETE', f'/api/application/delete/{resume_id}')

    def list_applicants(self, job_id: str) -> List[Application]:
        payload = self._request('GET', f'/api/application/applications/{job_id}')
        return [Application.from_dict(a) for a in payload.get('data') or [] if isinstance(a, dict)]

    def get_applicant(self, user_id: str) -> JobSeekerProfile:
        payload = self._request('GET', f'/api/application/user/{user_id}')
        data = payload.get('data')
        if not isinstance(data, dict):
            raise BackendError('Applicant not found', payload=payload)
        return JobSeekerProfile.from_dict(data)
