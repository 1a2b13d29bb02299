from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .api_client import BackendClient
from .errors import ValidationError
from .log import get_logger
from .models import ROLE_USER, ROLES

log = get_logger(__name__)


class Step(str, Enum):
    REQUEST_OTP = 'request_otp'
    RESET_WITH_OTP = 'reset_with_otp'
    CLOSED = 'closed'


@dataclass
class ForgotPasswordFlow:
    """Two-step forgot-password dialog: ask for an OTP, then reset with it."""

    step: Step = Step.CLOSED
    email: str = ''
    role: str = ROLE_USER
    otp: str = ''
    new_password: str = ''
    confirm_password: str = ''

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ForgotPasswordFlow':
        if not data:
            return cls()
        try:
            step = Step(data.get('step', Step.CLOSED.value))
        except ValueError:
            step = Step.CLOSED
        return cls(step=step, email=data.get('email', ''), role=data.get('role', ROLE_USER))

    def to_dict(self) -> Dict[str, Any]:
        # secrets stay out of the cookie
        data = asdict(self)
        data['step'] = self.step.value
        for k in ('otp', 'new_password', 'confirm_password'):
            data.pop(k)
        return data

    @property
    def is_open(self) -> bool:
        return self.step != Step.CLOSED

    def _clear(self):
        self.email = ''
        self.role = ROLE_USER
        self._clear_secrets()

    def _clear_secrets(self):
        self.otp = ''
        self.new_password = ''
        self.confirm_password = ''

    def _expect(self, step: Step):
        if self.step != step:
            raise ValidationError('This password reset step is no longer active. Please start again.')

    def open(self):
        self._clear()
        self.step = Step.REQUEST_OTP

    def request_otp(self, client: BackendClient, email: str, role: str) -> str:
        self._expect(Step.REQUEST_OTP)
        email = (email or '').strip()
        if not email:
            raise ValidationError('Email is required', {'email': 'Email is required'})
        if role not in ROLES:
            raise ValidationError(f'Unknown role: {role}')
        self.email = email
        self.role = role
        message = client.forgot_password(email, role)
        self.step = Step.RESET_WITH_OTP
        log.info('OTP requested for a %s account', role)
        return message

    def back(self):
        self._expect(Step.RESET_WITH_OTP)
        self._clear_secrets()
        self.step = Step.REQUEST_OTP

    def submit_reset(self, client: BackendClient, otp: str, new_password: str, confirm_password: str) -> str:
        self._expect(Step.RESET_WITH_OTP)
        self.otp = (otp or '').strip()
        self.new_password = new_password or ''
        self.confirm_password = confirm_password or ''
        if self.new_password != self.confirm_password:
            raise ValidationError('Passwords do not match', {'confirm_password': 'Passwords do not match'})
        if not self.otp:
            raise ValidationError('OTP is required', {'otp': 'OTP is required'})
        if not self.new_password:
            raise ValidationError('New password is required', {'new_password': 'New password is required'})
        message = client.reset_password(self.email, self.otp, self.new_password)
        self.cancel()
        return message

    def cancel(self):
        self._clear()
        self.step = Step.CLOSED
