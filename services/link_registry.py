"""
In-memory registry of one-time account linking codes
"""
import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

class PendingLink:
    """A code waiting to be sent back from LINE"""

    __slots__ = ('code', 'email', 'expires_at')

    def __init__(self, code, email, expires_at):
        self.code = code
        self.email = email
        self.expires_at = expires_at

    def __repr__(self):
        return f'<PendingLink {self.code} {self.email} until {self.expires_at.isoformat()}>'

class LinkRegistry:
    """TTL-bounded mapping of 6-digit codes to pending email links

    issue, redeem and sweep_expired all run under one lock. Codes are not
    checked against codes still in flight: if a new code collides with a
    pending one, the newer request wins and the older one can no longer be
    redeemed.
    """

    def __init__(self, ttl_seconds=300, clock=None):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._pending = {}
        self._lock = threading.Lock()

    def configure(self, ttl_seconds):
        with self._lock:
            self.ttl = timedelta(seconds=ttl_seconds)

    @staticmethod
    def generate_code():
        """Random decimal code in 100000-999999"""
        return str(100000 + secrets.randbelow(900000))

    def issue(self, email):
        """Register a pending link for an email and return its code"""
        code = self.generate_code()

        with self._lock:
            previous = self._pending.get(code)
            if previous is not None:
                logger.warning(f"Link code collision, replacing pending link for {previous.email}")
            self._pending[code] = PendingLink(code, email, self._clock() + self.ttl)

        return code

    def redeem(self, code, now=None):
        """Consume a code

        Returns:
            str or None: The bound email, or None if the code is unknown or
            expired (the two cases are not distinguished)
        """
        now = now or self._clock()

        with self._lock:
            pending = self._pending.get(code)
            if pending is None:
                return None

            if now >= pending.expires_at:
                del self._pending[code]
                return None

            del self._pending[code]
            return pending.email

    def sweep_expired(self, now=None):
        """Drop every pending link whose expiry has passed

        Returns:
            int: Number of entries removed
        """
        now = now or self._clock()

        with self._lock:
            expired = [code for code, pending in self._pending.items() if pending.expires_at < now]
            for code in expired:
                del self._pending[code]

        return len(expired)

    def pending_count(self):
        with self._lock:
            return len(self._pending)

    def clear(self):
        with self._lock:
            self._pending.clear()

    def get(self, code, now=None):
        """Peek at a pending link without consuming it

        Returns None for unknown codes and for codes that can no longer be
        redeemed.
        """
        now = now or self._clock()

        with self._lock:
            pending = self._pending.get(code)
            if pending is None or now >= pending.expires_at:
                return None
            return pending

# Global registry instance
link_registry = LinkRegistry()
