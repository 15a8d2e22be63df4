"""
In-memory session tokens for the editor.
Tokens expire TOKEN_TIMEOUT ms after login; the store is bounded and
expired entries are dropped lazily.
"""

import secrets
import threading
import time
from collections import OrderedDict

TOKEN_TIMEOUT = 36000000  # 10 hours in ms
MAX_TOKENS = 1024


def now_ms():
    return int(time.time() * 1000)


class TokenStore:
    """Maps issued tokens to their issue time (ms), oldest first."""

    def __init__(self, timeout_ms=TOKEN_TIMEOUT, max_tokens=MAX_TOKENS, clock=now_ms):
        self.timeout_ms = timeout_ms
        self.max_tokens = max_tokens
        self._clock = clock
        self._tokens = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._tokens)

    def _expired(self, issued, now):
        return now - issued >= self.timeout_ms

    def clean_expired_tokens(self, now=None):
        """Remove expired tokens. Caller must hold the lock."""
        if now is None:
            now = self._clock()
        # Insertion order == issue order, so stop at the first live token
        while self._tokens:
            token, issued = next(iter(self._tokens.items()))
            if not self._expired(issued, now):
                break
            del self._tokens[token]

    def issue(self):
        """Create a new session token and return it."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            now = self._clock()
            self.clean_expired_tokens(now)
            while len(self._tokens) >= self.max_tokens:
                self._tokens.popitem(last=False)
            self._tokens[token] = now
        return token

    def is_valid(self, token):
        """True iff the token was issued and has not expired yet."""
        if not token:
            return False
        with self._lock:
            issued = self._tokens.get(token)
            if issued is None:
                return False
            if self._expired(issued, self._clock()):
                del self._tokens[token]
                return False
            return True
