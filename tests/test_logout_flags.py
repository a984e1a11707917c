# =============================================================================
# tests/test_logout_flags.py - Logout Flag Store Tests
# =============================================================================
# Tests for:
# - Marking explicit and forced logouts
# - Clearing (and clearing twice)
# - Rollback when a write fails part-way
# - The login page banner
#
# Run with: pytest tests/test_logout_flags.py -v
# =============================================================================

from unittest.mock import patch

import pytest

from core.models.session import LogoutFlag
from core.routes import LOGOUT_COOKIE_NAME
from core.session.banner import SESSION_EXPIRED_MESSAGE, login_banner
from core.session.flags import (
    LOGGED_OUT_KEY,
    REASON_KEY,
    SESSION_EXPIRED_KEY,
    LogoutFlagStore,
    LogoutFlagWriteError,
)
from core.session.storage import KeyValueStorage, MemoryStorage, StorageUnavailableError


# =============================================================================
# Storage Tests
# =============================================================================

class TestMemoryStorage:
    """Test the in-memory storage backend."""

    def test_set_get_delete(self):
        """Basic operations."""
        storage = MemoryStorage()
        storage.set("a", "1")
        assert storage.get("a") == "1"
        storage.delete("a")
        assert storage.get("a") is None

    def test_delete_missing_key(self):
        """Deleting a missing key is fine."""
        MemoryStorage().delete("missing")

    def test_unavailable_raises(self):
        """Disabled storage raises on every operation."""
        storage = MemoryStorage(available=False)
        with pytest.raises(StorageUnavailableError):
            storage.get("a")
        with pytest.raises(StorageUnavailableError):
            storage.set("a", "1")

    def test_satisfies_protocol(self):
        """MemoryStorage is a KeyValueStorage."""
        assert isinstance(MemoryStorage(), KeyValueStorage)


# =============================================================================
# Flag Store Tests
# =============================================================================

class TestMarkLoggedOut:
    """Test explicit logout."""

    def test_sets_flag_and_reason(self, flag_store):
        """After an explicit logout both reads reflect it."""
        flag_store.mark_logged_out("explicit")

        assert flag_store.was_logged_out() is True
        assert flag_store.get_logout_reason() == "explicit"
        assert flag_store.was_session_expired() is False

    def test_writes_cookie_and_client_flag(self, flag_store, cookie_jar, local_storage):
        """Both halves are written."""
        flag_store.mark_logged_out("explicit")

        assert cookie_jar.get(LOGOUT_COOKIE_NAME) == "true"
        assert local_storage.get(LOGGED_OUT_KEY) == "true"

    def test_returns_flag(self, flag_store):
        """The written flag is returned."""
        flag = flag_store.mark_logged_out("password_changed")
        assert flag == LogoutFlag(logged_out=True, reason="password_changed", session_expired=False)

    def test_default_reason(self, flag_store):
        """Without a reason, user_logout is recorded."""
        flag_store.mark_logged_out()
        assert flag_store.get_logout_reason() == "user_logout"


class TestMarkSessionExpired:
    """Test forced logout."""

    def test_sets_expired(self, flag_store):
        """Forced logout sets both flags."""
        flag_store.mark_session_expired()

        assert flag_store.was_logged_out() is True
        assert flag_store.was_session_expired() is True
        assert flag_store.get_logout_reason() == "session_timeout"

    def test_explicit_after_expired_resets_expired(self, flag_store):
        """A later explicit logout replaces the expired marker."""
        flag_store.mark_session_expired()
        flag_store.mark_logged_out("explicit")
        assert flag_store.was_session_expired() is False


class TestClearLogoutFlags:
    """Test clearing."""

    def test_clears_both(self, flag_store, cookie_jar, local_storage):
        """Cookie and client flag both report false/None."""
        flag_store.mark_logged_out("explicit")
        flag_store.clear_logout_flags()

        assert flag_store.was_logged_out() is False
        assert flag_store.get_logout_reason() is None
        assert flag_store.was_session_expired() is False
        assert cookie_jar.get(LOGOUT_COOKIE_NAME) is None
        assert local_storage.get(LOGGED_OUT_KEY) is None

    def test_clear_twice_is_noop(self, flag_store):
        """Calling clear twice in a row does nothing the second time."""
        flag_store.mark_logged_out("explicit")
        flag_store.clear_logout_flags()
        flag_store.clear_logout_flags()
        assert flag_store.snapshot() == LogoutFlag()

    def test_clear_when_never_set(self, flag_store):
        """Clearing a clean store is not an error."""
        flag_store.clear_logout_flags()
        assert flag_store.was_logged_out() is False

    def test_partial_clear_restored(self, flag_store, local_storage, cookie_jar):
        """A delete failing part-way puts the removed keys back."""
        flag_store.mark_session_expired()
        original_delete = local_storage.delete

        def failing_delete(key):
            if key == REASON_KEY:
                raise StorageUnavailableError("delete", key, "storage locked")
            original_delete(key)

        with patch.object(local_storage, "delete", side_effect=failing_delete):
            with pytest.raises(StorageUnavailableError):
                flag_store.clear_logout_flags()

        assert local_storage.get(LOGGED_OUT_KEY) == "true"
        assert local_storage.get(SESSION_EXPIRED_KEY) == "true"
        assert local_storage.get(REASON_KEY) == "session_timeout"
        assert cookie_jar.get(LOGOUT_COOKIE_NAME) == "true"

    def test_cookie_delete_failure_restores_client_flag(self, flag_store, local_storage, cookie_jar):
        """The cookie goes last; if it cannot be removed the client flag comes back."""
        flag_store.mark_logged_out("explicit")

        with patch.object(
            cookie_jar,
            "delete",
            side_effect=StorageUnavailableError("delete", LOGOUT_COOKIE_NAME, "read-only"),
        ):
            with pytest.raises(StorageUnavailableError):
                flag_store.clear_logout_flags()

        assert flag_store.snapshot() == LogoutFlag(logged_out=True, reason="explicit")
        assert cookie_jar.get(LOGOUT_COOKIE_NAME) == "true"


class TestReads:
    """Test the read side."""

    def test_cookie_alone_counts_as_logged_out(self, flag_store, cookie_jar):
        """A cookie set by another tab is honored."""
        cookie_jar.set(LOGOUT_COOKIE_NAME, "true")
        assert flag_store.was_logged_out() is True

    def test_other_cookie_values_ignored(self, flag_store, cookie_jar):
        """Only the exact value 'true' counts."""
        cookie_jar.set(LOGOUT_COOKIE_NAME, "false")
        assert flag_store.was_logged_out() is False

    def test_reads_have_no_side_effects(self, flag_store, local_storage):
        """Reading does not change storage."""
        flag_store.mark_logged_out("explicit")
        before = repr(local_storage)

        flag_store.was_logged_out()
        flag_store.was_session_expired()
        flag_store.get_logout_reason()
        flag_store.snapshot()

        assert repr(local_storage) == before

    def test_read_failure_propagates(self, cookie_jar):
        """The store reports storage failures; guards decide what to do."""
        store = LogoutFlagStore(storage=MemoryStorage(available=False), cookies=cookie_jar)
        with pytest.raises(StorageUnavailableError):
            store.was_logged_out()


class TestWriteFailure:
    """Test that a failed logout leaves nothing behind."""

    def test_cookie_write_failure(self, local_storage):
        """Cookie write fails: nothing written, error raised."""
        store = LogoutFlagStore(storage=local_storage, cookies=MemoryStorage(available=False))

        with pytest.raises(LogoutFlagWriteError):
            store.mark_logged_out("explicit")

        assert local_storage.get(LOGGED_OUT_KEY) is None

    def test_client_write_failure_rolls_back_cookie(self, cookie_jar):
        """Client write fails after the cookie: the cookie is removed again."""
        store = LogoutFlagStore(storage=MemoryStorage(available=False), cookies=cookie_jar)

        with pytest.raises(LogoutFlagWriteError):
            store.mark_session_expired()

        assert cookie_jar.get(LOGOUT_COOKIE_NAME) is None

    def test_partial_client_write_rolled_back(self, flag_store, local_storage, cookie_jar):
        """Failure on the last key removes the earlier keys."""
        original_set = local_storage.set

        def failing_set(key, value):
            if key == REASON_KEY:
                raise StorageUnavailableError("write", key, "quota exceeded")
            original_set(key, value)

        with patch.object(local_storage, "set", side_effect=failing_set):
            with pytest.raises(LogoutFlagWriteError) as exc_info:
                flag_store.mark_logged_out("explicit")

        assert exc_info.value.code == "LOGOUT_FLAG_WRITE_FAILED"
        assert local_storage.get(LOGGED_OUT_KEY) is None
        assert local_storage.get(SESSION_EXPIRED_KEY) is None
        assert cookie_jar.get(LOGOUT_COOKIE_NAME) is None


# =============================================================================
# Banner Tests
# =============================================================================

class TestLoginBanner:
    """Test login_banner()."""

    def test_session_expired_query(self):
        """?session=expired alone shows the inactivity message."""
        banner = login_banner(session="expired")
        assert banner.message == SESSION_EXPIRED_MESSAGE

    def test_explicit_reason(self):
        """An explicit reason is shown with underscores as spaces."""
        flag = LogoutFlag(logged_out=True, reason="password_changed")
        banner = login_banner(session="expired", flag=flag)

        assert banner.title == "Logged Out"
        assert banner.message == "You have been logged out: password changed."

    def test_expired_flag(self):
        """A forced logout shows the inactivity message."""
        flag = LogoutFlag(logged_out=True, reason="session_timeout", session_expired=True)
        assert login_banner(flag=flag).message == SESSION_EXPIRED_MESSAGE

    def test_no_banner(self):
        """Nothing to say on a plain visit."""
        assert login_banner() is None
        assert login_banner(session="other", flag=LogoutFlag()) is None
