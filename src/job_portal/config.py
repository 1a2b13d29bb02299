import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .log import get_logger

log = get_logger(__name__)

DEFAULT_API_URL = 'https://job-portal-backend-82a8.vercel.app'
DEFAULT_COUNTRIES_URL = 'https://restcountries.com/v3.1/all'
DEFAULT_GEONAMES_URL = 'http://api.geonames.org/searchJSON'


@dataclass
class Settings:
    api_base_url: str = DEFAULT_API_URL
    request_timeout: float = 20.0
    secret_key: str = ''
    max_upload_mb: int = 20
    geonames_username: str = ''
    countries_url: str = DEFAULT_COUNTRIES_URL
    geonames_url: str = DEFAULT_GEONAMES_URL
    host: str = '127.0.0.1'
    port: int = 8770
    log_level: str = 'INFO'

    @property
    def max_content_length(self) -> int:
        return self.max_upload_mb * 1024 * 1024


_ENV_KEYS = {
    'api_base_url': 'JOB_PORTAL_API_URL',
    'request_timeout': 'JOB_PORTAL_TIMEOUT',
    'secret_key': 'FLASK_SECRET_KEY',
    'max_upload_mb': 'JOB_PORTAL_MAX_UPLOAD_MB',
    'geonames_username': 'GEONAMES_USERNAME',
    'countries_url': 'JOB_PORTAL_COUNTRIES_URL',
    'geonames_url': 'JOB_PORTAL_GEONAMES_URL',
    'host': 'JOB_PORTAL_HOST',
    'port': 'JOB_PORTAL_PORT',
    'log_level': 'LOG_LEVEL',
}


def _coerce(name: str, value: Any) -> Any:
    kind = Settings.__dataclass_fields__[name].type
    if kind in (int, 'int'):
        return int(value)
    if kind in (float, 'float'):
        return float(value)
    return str(value).strip()


def load_yaml_overrides(path: Path) -> Dict[str, Any]:
    if not path.exists():
        log.warning('Config file %s not found; using environment only', path)
        return {}
    data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    if not isinstance(data, dict):
        raise ValueError(f'{path}: expected a mapping at top level')
    known = {f.name for f in fields(Settings)}
    return {k: v for k, v in data.items() if k in known}


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Environment (after .env) first, then the optional YAML file on top."""
    load_dotenv()
    values: Dict[str, Any] = {}
    for name, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key)
        if raw is not None and raw.strip() != '':
            values[name] = _coerce(name, raw)

    config_path = config_path or os.getenv('JOB_PORTAL_CONFIG')
    if config_path:
        for name, raw in load_yaml_overrides(Path(config_path)).items():
            values[name] = _coerce(name, raw)

    settings = Settings(**values)
    settings.api_base_url = settings.api_base_url.rstrip('/')
    if not settings.secret_key:
        log.warning('FLASK_SECRET_KEY not set; generating a random key (sessions will not survive a restart)')
        settings.secret_key = os.urandom(24).hex()
    return settings
