"""Tests for services.credential_manager."""

import sys
from unittest.mock import MagicMock, patch

from services.credential_manager import (
    CREDENTIAL_KEYS,
    SERVICE_NAME,
    delete_credential,
    get_credential,
    set_credential,
)


class TestGetCredential:
    def test_returns_value(self):
        mock_keyring = MagicMock()
        mock_keyring.get_password.return_value = "signing-key"
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            result = get_credential("JWT_SECRET_KEY")
        assert result == "signing-key"
        mock_keyring.get_password.assert_called_once_with(SERVICE_NAME, "JWT_SECRET_KEY")

    def test_returns_none_when_not_found(self):
        mock_keyring = MagicMock()
        mock_keyring.get_password.return_value = None
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert get_credential("JWT_SECRET_KEY") is None

    def test_returns_none_when_keyring_not_installed(self):
        with patch.dict(sys.modules, {"keyring": None}):
            assert get_credential("JWT_SECRET_KEY") is None

    def test_returns_none_on_keyring_exception(self):
        mock_keyring = MagicMock()
        mock_keyring.get_password.side_effect = Exception("no backend")
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert get_credential("JWT_SECRET_KEY") is None


class TestSetCredential:
    def test_stores_value(self):
        mock_keyring = MagicMock()
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            result = set_credential("JWT_SECRET_KEY", "signing-key")
        assert result is True
        mock_keyring.set_password.assert_called_once_with(
            SERVICE_NAME, "JWT_SECRET_KEY", "signing-key"
        )

    def test_rejects_non_credential_key(self):
        mock_keyring = MagicMock()
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert set_credential("DATABASE_URL", "sqlite://") is False
        mock_keyring.set_password.assert_not_called()

    def test_rejects_empty_value(self):
        mock_keyring = MagicMock()
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert set_credential("JWT_SECRET_KEY", "") is False
            assert set_credential("JWT_SECRET_KEY", "   ") is False
        mock_keyring.set_password.assert_not_called()

    def test_returns_false_when_keyring_not_installed(self):
        with patch.dict(sys.modules, {"keyring": None}):
            assert set_credential("JWT_SECRET_KEY", "signing-key") is False

    def test_returns_false_on_keyring_exception(self):
        mock_keyring = MagicMock()
        mock_keyring.set_password.side_effect = Exception("locked")
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert set_credential("JWT_SECRET_KEY", "signing-key") is False


class TestDeleteCredential:
    def test_deletes_value(self):
        mock_keyring = MagicMock()
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert delete_credential("JWT_SECRET_KEY") is True
        mock_keyring.delete_password.assert_called_once_with(SERVICE_NAME, "JWT_SECRET_KEY")

    def test_rejects_non_credential_key(self):
        mock_keyring = MagicMock()
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert delete_credential("TIMEZONE") is False
        mock_keyring.delete_password.assert_not_called()

    def test_returns_false_on_keyring_exception(self):
        mock_keyring = MagicMock()
        mock_keyring.delete_password.side_effect = Exception("not found")
        with patch.dict(sys.modules, {"keyring": mock_keyring}):
            assert delete_credential("JWT_SECRET_KEY") is False


class TestCredentialKeys:
    def test_contains_signing_key_only(self):
        assert CREDENTIAL_KEYS == {"JWT_SECRET_KEY"}

    def test_excludes_non_secret_keys(self):
        for key in ("DATABASE_URL", "TIMEZONE", "JWT_ALGORITHM", "LOG_LEVEL"):
            assert key not in CREDENTIAL_KEYS

    def test_is_frozen(self):
        assert isinstance(CREDENTIAL_KEYS, frozenset)
