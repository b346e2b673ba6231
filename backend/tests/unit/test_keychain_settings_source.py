"""Tests for KeychainSettingsSource integration in config.py."""

import os
from unittest.mock import patch

from config import KeychainSettingsSource, Settings
from services.credential_manager import CREDENTIAL_KEYS

# Environment variables that would interfere with Settings defaults if
# set in the test runner's shell.  We clear them for isolation.
_ENV_VARS_TO_CLEAR = {
    "DATABASE_URL",
    "ENVIRONMENT",
    "DEBUG",
    "LOG_LEVEL",
    "TIMEZONE",
    *CREDENTIAL_KEYS,
}


def _clean_env():
    """Return a dict suitable for ``os.environ`` patching that removes
    any variables the Settings class reads."""
    return {k: v for k, v in os.environ.items() if k not in _ENV_VARS_TO_CLEAR}


class TestKeychainSettingsSource:
    """Test the KeychainSettingsSource pydantic-settings source."""

    def test_keychain_value_overrides_default(self):
        """A signing key in keychain should override the default."""
        with (
            patch.dict(os.environ, _clean_env(), clear=True),
            patch("config.get_credential") as mock_get,
        ):
            mock_get.side_effect = lambda key: "from-keychain" if key == "JWT_SECRET_KEY" else None
            s = Settings(_env_file=None)
            assert s.JWT_SECRET_KEY == "from-keychain"

    def test_init_value_overrides_keychain(self):
        """An explicit init value should override keychain."""
        with (
            patch.dict(os.environ, _clean_env(), clear=True),
            patch("config.get_credential", return_value="from-keychain"),
        ):
            s = Settings(_env_file=None, JWT_SECRET_KEY="from-init")
            assert s.JWT_SECRET_KEY == "from-init"

    def test_non_credential_fields_skip_keychain(self):
        """Fields not in CREDENTIAL_KEYS should not hit keychain."""
        with (
            patch.dict(os.environ, _clean_env(), clear=True),
            patch("config.get_credential") as mock_get,
        ):
            mock_get.return_value = "should-not-be-used"
            s = Settings(_env_file=None)
            assert s.DATABASE_URL == "sqlite:///./mymomentum.db"
            assert s.TIMEZONE == "Asia/Taipei"
            called_keys = [call.args[0] for call in mock_get.call_args_list]
            assert called_keys == ["JWT_SECRET_KEY"]

    def test_env_fallback_when_keychain_empty(self):
        """When keychain returns None, the env var is used."""
        env = _clean_env()
        env["JWT_SECRET_KEY"] = "from-env"
        with (
            patch.dict(os.environ, env, clear=True),
            patch("config.get_credential", return_value=None),
        ):
            s = Settings(_env_file=None)
            assert s.JWT_SECRET_KEY == "from-env"

    def test_source_is_in_priority_chain(self):
        """KeychainSettingsSource sits right after init settings."""
        sources = Settings.settings_customise_sources(
            Settings,
            init_settings=object(),
            env_settings=object(),
            dotenv_settings=object(),
            file_secret_settings=object(),
        )
        source_types = [type(s) for s in sources]
        assert source_types.index(KeychainSettingsSource) == 1

    def test_keychain_overrides_env_var(self):
        """Keychain has higher priority than env vars in the source chain."""
        env = _clean_env()
        env["JWT_SECRET_KEY"] = "from-env"
        with (
            patch.dict(os.environ, env, clear=True),
            patch("config.get_credential", return_value="from-keychain"),
        ):
            s = Settings(_env_file=None)
            assert s.JWT_SECRET_KEY == "from-keychain"
