"""Country / state / city lookups for the post-job form.

Countries come from REST Countries; states (ADM1 divisions) and populated
places come from GeoNames, which needs a registered username.
"""
from typing import Any, Dict, List, Optional

import requests

from .errors import BackendError, TransportError
from .log import get_logger

log = get_logger(__name__)


class GeoDirectory:
    def __init__(self, countries_url: str, geonames_url: str, username: str, timeout: float = 20.0,
                 session: Optional[requests.Session] = None):
        self.countries_url = countries_url
        self.geonames_url = geonames_url
        self.username = username
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    def enabled(self) -> bool:
        return bool(self.username)

    def _get(self, url: str, params: Dict[str, Any]) -> Any:
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            log.warning('Geo lookup %s failed: %s', url, e)
            raise TransportError('Location lookup is unavailable right now.') from e

    def countries(self) -> List[Dict[str, str]]:
        data = self._get(self.countries_url, {'fields': 'name,cca2'})
        out = []
        for c in data if isinstance(data, list) else []:
            code = c.get('cca2')
            name = (c.get('name') or {}).get('common')
            if code and name:
                out.append({'code': code, 'name': name})
        return sorted(out, key=lambda c: c['name'])

    def _geonames(self, params: Dict[str, Any]) -> List[str]:
        if not self.enabled():
            raise BackendError('GeoNames username is not configured')
        data = self._get(self.geonames_url, {**params, 'username': self.username})
        status = data.get('status') if isinstance(data, dict) else None
        if status:
            raise BackendError(str(status.get('message') or 'GeoNames lookup failed'), payload=data)
        names = [g.get('name') for g in (data or {}).get('geonames') or []]
        return sorted({n for n in names if n})

    def states(self, country: str) -> List[str]:
        if not country:
            return []
        return self._geonames({'country': country, 'featureClass': 'A', 'featureCode': 'ADM1'})

    def cities(self, country: str, state: str) -> List[str]:
        if not country or not state:
            return []
        return self._geonames({'q': state, 'country': country, 'featureClass': 'P'})
