"""Tests for scripts.migrate_env_to_keychain."""

from unittest.mock import patch

import pytest

from scripts.migrate_env_to_keychain import _clean_env_file, migrate


@pytest.fixture
def env_file(tmp_path):
    """Create a temporary .env file with sample content."""
    p = tmp_path / ".env"
    p.write_text(
        "# Database config\n"
        "DATABASE_URL=sqlite:///./mymomentum.db\n"
        "TIMEZONE=Asia/Taipei\n"
        "\n"
        "# Auth\n"
        "JWT_SECRET_KEY=dev-signing-key\n"
    )
    return p


class TestMigrate:
    def test_migrates_signing_key(self, env_file, capsys):
        with (
            patch("scripts.migrate_env_to_keychain.set_credential", return_value=True) as mock_set,
            patch("scripts.migrate_env_to_keychain.get_credential", return_value=None),
        ):
            migrate(env_file)

        mock_set.assert_called_once_with("JWT_SECRET_KEY", "dev-signing-key")
        assert "Stored in keychain (1)" in capsys.readouterr().out

    def test_skips_missing_value(self, tmp_path, capsys):
        p = tmp_path / ".env"
        p.write_text("DATABASE_URL=sqlite:///./mymomentum.db\nJWT_SECRET_KEY=\n")
        with (
            patch("scripts.migrate_env_to_keychain.set_credential") as mock_set,
            patch("scripts.migrate_env_to_keychain.get_credential", return_value=None),
        ):
            migrate(p)

        mock_set.assert_not_called()
        assert "Skipped (empty/missing in .env)" in capsys.readouterr().out

    def test_skips_already_stored(self, env_file, capsys):
        with (
            patch("scripts.migrate_env_to_keychain.set_credential") as mock_set,
            patch("scripts.migrate_env_to_keychain.get_credential", return_value="dev-signing-key"),
        ):
            migrate(env_file)

        mock_set.assert_not_called()
        assert "Already in keychain" in capsys.readouterr().out

    def test_reports_failures(self, env_file, capsys):
        with (
            patch("scripts.migrate_env_to_keychain.set_credential", return_value=False),
            patch("scripts.migrate_env_to_keychain.get_credential", return_value=None),
        ):
            migrate(env_file)

        assert "Failed" in capsys.readouterr().out

    def test_exits_when_env_file_missing(self, tmp_path):
        with pytest.raises(SystemExit):
            migrate(tmp_path / ".env")


class TestCleanEnvFile:
    def test_removes_migrated_keys(self, env_file):
        _clean_env_file(env_file, ["JWT_SECRET_KEY"])
        content = env_file.read_text()

        assert "JWT_SECRET_KEY" not in content
        assert "DATABASE_URL" in content
        assert "# Auth" in content

    def test_clean_flag_triggers_file_rewrite(self, env_file, capsys):
        with (
            patch("scripts.migrate_env_to_keychain.set_credential", return_value=True),
            patch("scripts.migrate_env_to_keychain.get_credential", return_value=None),
        ):
            migrate(env_file, clean=True)

        content = env_file.read_text()
        assert "JWT_SECRET_KEY=" not in content
        assert "TIMEZONE=" in content
        assert "Removed" in capsys.readouterr().out

    def test_clean_no_op_when_nothing_migrated(self, tmp_path, capsys):
        p = tmp_path / ".env"
        p.write_text("DATABASE_URL=sqlite:///./mymomentum.db\n")

        with (
            patch("scripts.migrate_env_to_keychain.set_credential", return_value=True),
            patch("scripts.migrate_env_to_keychain.get_credential", return_value=None),
        ):
            migrate(p, clean=True)

        assert "Nothing to clean" in capsys.readouterr().out
