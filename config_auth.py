"""
Credential store for the single editor account.
The salted hash lives in auth.json; it is created once from the PASSWORD
environment variable and only read afterwards.
"""

import hmac
import json
import logging

from errors import CredentialError, FatalIOError
from generate_password_hash import generate_password_hash

logger = logging.getLogger(__name__)


def save_credentials(path, password_hash, salt):
    """Write {hash, salt} to the credential file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'hash': password_hash, 'salt': salt}, f)
    except OSError as e:
        raise FatalIOError(f"Could not write credential file {path}") from e


class CredentialStore:

    def __init__(self, password_hash, salt):
        if not password_hash or not salt:
            raise CredentialError()
        if not isinstance(password_hash, str) or not isinstance(salt, str):
            raise CredentialError("Credential hash and salt must be strings.")
        if not password_hash.isascii() or not salt.isascii():
            raise CredentialError("Credential hash and salt must be ASCII.")
        self.password_hash = password_hash
        self.salt = salt

    @classmethod
    def load_or_create(cls, path, password=None):
        """Load auth.json, or derive it from the operator password on first start."""
        if path.exists():
            try:
                with open(path, encoding='utf-8') as f:
                    auth = json.load(f)
            except (OSError, ValueError) as e:
                raise CredentialError(f"Unreadable credential file {path}") from e
            if not isinstance(auth, dict):
                raise CredentialError(f"Malformed credential file {path}")
            logger.info(f"[AUTH] Loaded editor credentials from {path}")
            return cls(auth.get('hash', ''), auth.get('salt', ''))

        if not password:
            raise CredentialError()

        salt, password_hash = generate_password_hash(password)
        store = cls(password_hash, salt)
        save_credentials(path, password_hash, salt)
        logger.info(f"[AUTH] Created editor credentials in {path}")
        return store

    def verify(self, password):
        """Securely verify password using PBKDF2."""
        if not isinstance(password, str):
            return False
        _, password_hash = generate_password_hash(password, self.salt)
        # Use constant-time comparison to prevent timing attacks
        return hmac.compare_digest(password_hash, self.password_hash)
