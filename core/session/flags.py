# =============================================================================
# core/session/flags.py - Logout Flag Store
# =============================================================================
# Records that the current session was explicitly ended (and why) so that
# cached authenticated views are not trusted afterwards.
#
# The flag is written to two places that must agree:
# - client storage: wasLoggedOut / sessionExpired / logoutReason
# - cookie: auth_logged_out=true, read by the gate middleware
#
# Only the logout paths write the flag (mark_logged_out, mark_session_expired).
# Only route-boundary code clears it (guards on public routes, the gate
# middleware, the login page, a fresh login).
#
# Usage:
#   store = LogoutFlagStore(storage=MemoryStorage(), cookies=cookie_jar)
#   store.mark_logged_out("user_logout")
#   store.was_logged_out()       # True
#   store.clear_logout_flags()
# =============================================================================

from __future__ import annotations

import logging

from core.models.session import LogoutFlag
from core.routes import LOGOUT_COOKIE_NAME, LOGOUT_COOKIE_VALUE
from core.session.storage import KeyValueStorage, StorageUnavailableError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Client storage keys
LOGGED_OUT_KEY = "wasLoggedOut"
SESSION_EXPIRED_KEY = "sessionExpired"
REASON_KEY = "logoutReason"

# Reasons written by the two logout paths
USER_LOGOUT_REASON = "user_logout"
SESSION_TIMEOUT_REASON = "session_timeout"

_TRUE = "true"
_FALSE = "false"


class LogoutFlagWriteError(ApplicationError):
    """Raised when a logout could not persist its flag. Nothing is left half-written."""

    def __init__(self, reason: str, error: str):
        super().__init__(
            message=f"Failed to record logout ({reason}): {error}",
            code="LOGOUT_FLAG_WRITE_FAILED",
            suggestion="Retry the logout; if it keeps failing, clear site data in the browser",
            details={"reason": reason, "error": error},
        )


class LogoutFlagStore:
    """
    Read/write API for the logout flag pair.

    Args:
        storage: Client-readable storage (local storage)
        cookies: Server-readable cookie jar
    """

    def __init__(self, storage: KeyValueStorage, cookies: KeyValueStorage):
        self.storage = storage
        self.cookies = cookies

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def mark_logged_out(self, reason: str = USER_LOGOUT_REASON) -> LogoutFlag:
        """
        Record an explicit logout.

        Args:
            reason: Why the session ended (shown on the login page)

        Returns:
            The flag as written

        Raises:
            LogoutFlagWriteError: If either storage rejected the write
        """
        return self._write(reason=reason, session_expired=False)

    def mark_session_expired(self) -> LogoutFlag:
        """
        Record a forced logout after inactivity.

        Raises:
            LogoutFlagWriteError: If either storage rejected the write
        """
        return self._write(reason=SESSION_TIMEOUT_REASON, session_expired=True)

    def _write(self, reason: str, session_expired: bool) -> LogoutFlag:
        writes = [
            (self.cookies, LOGOUT_COOKIE_NAME, LOGOUT_COOKIE_VALUE),
            (self.storage, LOGGED_OUT_KEY, _TRUE),
            (self.storage, SESSION_EXPIRED_KEY, _TRUE if session_expired else _FALSE),
            (self.storage, REASON_KEY, reason),
        ]
        done: list[tuple[KeyValueStorage, str]] = []

        try:
            for backend, key, value in writes:
                backend.set(key, value)
                done.append((backend, key))
        except StorageUnavailableError as e:
            logger.error(f"Logout flag write failed, rolling back: {e.message}")
            self._rollback(done)
            raise LogoutFlagWriteError(reason, e.message) from e

        logger.info(f"Session marked as logged out (reason={reason}, expired={session_expired})")
        return LogoutFlag(logged_out=True, reason=reason, session_expired=session_expired)

    @staticmethod
    def _rollback(done: list[tuple[KeyValueStorage, str]]) -> None:
        for backend, key in reversed(done):
            try:
                backend.delete(key)
            except StorageUnavailableError as e:
                logger.error(f"Rollback of '{key}' failed: {e.message}")

    def clear_logout_flags(self) -> None:
        """
        Delete the flag from both stores. Calling it when already clear is a no-op.

        Client keys go first and the cookie last. If a delete fails part-way
        the keys already removed are put back, so the two halves never
        disagree.

        Raises:
            StorageUnavailableError: If a backend cannot be written
        """
        deletes = [
            (self.storage, LOGGED_OUT_KEY),
            (self.storage, SESSION_EXPIRED_KEY),
            (self.storage, REASON_KEY),
            (self.cookies, LOGOUT_COOKIE_NAME),
        ]
        previous = [(backend, key, backend.get(key)) for backend, key in deletes]
        had_flag = self.was_logged_out()
        done: list[tuple[KeyValueStorage, str, str | None]] = []

        try:
            for backend, key, value in previous:
                backend.delete(key)
                done.append((backend, key, value))
        except StorageUnavailableError as e:
            logger.error(f"Clearing logout flags failed, restoring: {e.message}")
            self._restore(done)
            raise

        if had_flag:
            logger.info("Logout flags cleared")

    @staticmethod
    def _restore(done: list[tuple[KeyValueStorage, str, str | None]]) -> None:
        for backend, key, value in reversed(done):
            if value is None:
                continue
            try:
                backend.set(key, value)
            except StorageUnavailableError as e:
                logger.error(f"Restore of '{key}' failed: {e.message}")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def _read_bool(backend: KeyValueStorage, key: str) -> bool:
        return backend.get(key) == _TRUE

    def _cookie_set(self) -> bool:
        return self.cookies.get(LOGOUT_COOKIE_NAME) == LOGOUT_COOKIE_VALUE

    def was_logged_out(self) -> bool:
        """True if either the client flag or the cookie says the session ended."""
        return self._read_bool(self.storage, LOGGED_OUT_KEY) or self._cookie_set()

    def was_session_expired(self) -> bool:
        """True if the session ended through the inactivity path."""
        return self._read_bool(self.storage, SESSION_EXPIRED_KEY)

    def get_logout_reason(self) -> str | None:
        """Reason recorded with the logout, or None."""
        return self.storage.get(REASON_KEY)

    def snapshot(self) -> LogoutFlag:
        """All three reads as one LogoutFlag."""
        return LogoutFlag(
            logged_out=self.was_logged_out(),
            reason=self.get_logout_reason(),
            session_expired=self.was_session_expired(),
        )
