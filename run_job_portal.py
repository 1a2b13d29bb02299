import sys
from pathlib import Path

ROOT = Path(__file__).parent
SRC = ROOT / 'src'
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from job_portal.app import create_app  # noqa: E402
from job_portal.config import load_settings  # noqa: E402

SETTINGS = load_settings()
APP = create_app(SETTINGS)

if __name__ == '__main__':
    APP.run(host=SETTINGS.host, port=SETTINGS.port, debug=False)
