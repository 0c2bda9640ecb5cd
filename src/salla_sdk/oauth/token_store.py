"""Thread-safe holder for the current OAuth credential.

Reads take the shared side of a read/write lock. ``ensure_valid`` takes the
exclusive side for the whole refresh round-trip, so concurrent callers wait for
the one in-flight refresh instead of issuing their own.
"""

import logging
from datetime import timedelta
from typing import Callable

from salla_sdk.errors import CredentialExhaustedError
from salla_sdk.oauth.models import Token
from salla_sdk.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

REFRESH_MARGIN = timedelta(minutes=5)

RefreshFunc = Callable[[str], Token]


class TokenStore:
    def __init__(
        self,
        token: Token | None = None,
        *,
        refresh_margin: timedelta = REFRESH_MARGIN,
        on_refresh: Callable[[Token], None] | None = None,
    ) -> None:
        self._token = token
        self._lock = ReadWriteLock()
        self._refresh_margin = refresh_margin
        self._on_refresh = on_refresh

    def get(self) -> Token | None:
        with self._lock.read():
            return self._token

    def set(self, token: Token | None) -> None:
        with self._lock.write():
            self._token = token

    def needs_refresh(self) -> bool:
        token = self.get()
        return token is None or token.expires_within(self._refresh_margin)

    def ensure_valid(self, refresh: RefreshFunc) -> Token:
        """Return a token that is good for at least the refresh margin.

        ``refresh`` is called with the stored refresh token while the exclusive
        lock is held. If it raises, the previous token stays in place and the
        error propagates.
        """
        with self._lock.write():
            current = self._token
            if current is not None and not current.expires_within(self._refresh_margin):
                return current

            if current is None or not current.refresh_token:
                raise CredentialExhaustedError()

            logger.info("Access token expired or expiring soon, refreshing")
            new_token = refresh(current.refresh_token)
            self._token = new_token
            logger.info("Access token refreshed, valid until %s", new_token.expiry)

        if self._on_refresh is not None:
            self._on_refresh(new_token)
        return new_token
