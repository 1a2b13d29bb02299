"""Who is logged in, and with which role.

The store is built once per request over a mutable mapping (the signed Flask
session cookie in the app) and closed when the request ends. Only the token
and the role are persisted; the profile is fetched again on every bootstrap.
"""
from typing import Callable, MutableMapping, Optional

from .api_client import BackendClient
from .errors import PortalError, ValidationError
from .log import get_logger
from .models import ROLES, Profile

log = get_logger(__name__)

TOKEN_KEY = 'token'
ROLE_KEY = 'role'

ClientFactory = Callable[[Optional[str]], BackendClient]


class SessionStore:
    def __init__(self, storage: MutableMapping, client_factory: ClientFactory):
        self._storage = storage
        self._client_factory = client_factory
        self._client: Optional[BackendClient] = None
        self.token: Optional[str] = None
        self.role: Optional[str] = None
        self.user: Optional[Profile] = None
        self.loading = False

    @property
    def client(self) -> BackendClient:
        """Client bound to the current token; rebuilt whenever the token changes."""
        if self._client is None or self._client.token != self.token:
            if self._client is not None:
                self._client.close()
            self._client = self._client_factory(self.token)
        return self._client

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def bootstrap(self):
        token = self._storage.get(TOKEN_KEY)
        role = self._storage.get(ROLE_KEY)
        if not (token and role):
            self.loading = False
            return
        self.loading = True
        self.token = token
        self.role = role
        self._fetch_user()

    def login(self, token: str, role: str):
        if role not in ROLES:
            raise ValidationError(f'Unknown role: {role}')
        self._storage[TOKEN_KEY] = token
        self._storage[ROLE_KEY] = role
        self.token = token
        self.role = role
        self._fetch_user()

    def logout(self):
        self._storage.pop(TOKEN_KEY, None)
        self._storage.pop(ROLE_KEY, None)
        self.token = None
        self.role = None
        self.user = None

    def update_user(self, profile: Profile):
        self.user = profile

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def _fetch_user(self):
        try:
            self.user = self.client.get_profile(role=self.role)
        except PortalError as e:
            log.info('Profile fetch failed, clearing session: %s', e.message)
            self.logout()
        finally:
            self.loading = False
