"""
Runtime configuration for the site editor.
Values are read once from the environment when the server starts.
"""

import os
import logging
from pathlib import Path

# Templates shipped with the editor (index/edit/login fallbacks)
BUNDLED_TEMPLATES = Path(__file__).resolve().parent / 'public' / 'assets' / 'templates'


class Config:
    # Operator secret, only used when auth.json does not exist yet
    PASSWORD = os.getenv('PASSWORD', '')

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))
    DEBUG = os.getenv('DEBUG', '').lower() in ('1', 'true', 'yes')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Data root: auth.json, site-config.json, generated pages and public/
    SITE_ROOT = Path(os.getenv('SITE_ROOT', '.')).resolve()
    TEMPLATES_DIR = BUNDLED_TEMPLATES

    # Sessions (10 hours)
    TOKEN_TIMEOUT_MS = int(os.getenv('TOKEN_TIMEOUT_MS', '36000000'))
    MAX_TOKENS = int(os.getenv('MAX_TOKENS', '1024'))

    # Uploads
    MAX_UPLOAD = 524288000  # 500 MB
    MAX_FILES_PER_FIELD = 40

    @property
    def PUBLIC_DIR(self):
        return self.SITE_ROOT / 'public'

    @property
    def AUTH_PATH(self):
        return self.SITE_ROOT / 'auth.json'

    @property
    def SITE_CONFIG_PATH(self):
        return self.SITE_ROOT / 'site-config.json'


def configure_logging(level='INFO'):
    """Set up root logging once for the server process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )
