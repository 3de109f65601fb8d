"""
Tests for environment capture, the config resolver and runtime settings.
"""

import pytest

from kharch_baant.config import (
    ConfigResolver,
    EnvironmentSnapshot,
    ExecutionMode,
    RuntimeSettings,
    SettingsLoadError,
    config_load_settings,
    get_settings,
)


class TestEnvironmentSnapshot:
    """Tests for EnvironmentSnapshot.capture."""

    def test_capture_copies_environment(self):
        """Later changes to the source do not leak into the snapshot."""
        environ = {"SUPABASE_URL": "https://abc.supabase.co"}
        snapshot = EnvironmentSnapshot.capture(environ=environ)
        environ["SUPABASE_URL"] = "changed"
        environ["API_MODE"] = "supabase"

        assert snapshot["SUPABASE_URL"] == "https://abc.supabase.co"
        assert "API_MODE" not in snapshot

    def test_empty_value_is_kept(self):
        """An explicitly empty variable is distinct from an unset one."""
        snapshot = EnvironmentSnapshot.capture(environ={"GEMINI_API_KEY": ""})
        assert snapshot["GEMINI_API_KEY"] == ""
        assert snapshot.get("DEV_MODE") is None

    def test_env_file_fills_unset_variables(self, tmp_path):
        """Dotenv values are used only where the environment is silent."""
        env_file = tmp_path / ".env"
        env_file.write_text("API_MODE=mock\nSUPABASE_URL=https://from-file.co\n")

        snapshot = EnvironmentSnapshot.capture(
            environ={"SUPABASE_URL": "https://from-env.co"},
            env_file=str(env_file),
        )
        assert snapshot["SUPABASE_URL"] == "https://from-env.co"
        assert snapshot["API_MODE"] == "mock"

    def test_missing_env_file_is_ignored(self, tmp_path):
        """A dotenv path that does not exist is not an error."""
        snapshot = EnvironmentSnapshot.capture(
            environ={"API_MODE": "mock"},
            env_file=str(tmp_path / "missing.env"),
        )
        assert dict(snapshot) == {"API_MODE": "mock"}

    def test_build_tool_prefix_is_aliased(self):
        """VITE_ names are readable under their plain name."""
        snapshot = EnvironmentSnapshot.capture(environ={
            "VITE_CLERK_PUBLISHABLE_KEY": "pk_test_123",
            "VITE_API_MODE": "mock",
            "API_MODE": "supabase",
        })
        assert snapshot["CLERK_PUBLISHABLE_KEY"] == "pk_test_123"
        assert snapshot["API_MODE"] == "supabase"

    def test_snapshot_is_read_only(self):
        """The snapshot has no item assignment."""
        snapshot = EnvironmentSnapshot.capture(environ={})
        with pytest.raises(TypeError):
            snapshot["SUPABASE_URL"] = "x"


class TestConfigResolver:
    """Tests for ConfigResolver."""

    def test_resolve_present_value(self):
        resolver = ConfigResolver({"SUPABASE_URL": "https://abc.supabase.co"})
        assert resolver.resolve("SUPABASE_URL") == "https://abc.supabase.co"

    def test_resolve_unknown_key_is_none(self):
        """Unrecognized keys resolve to None rather than raising."""
        resolver = ConfigResolver({})
        assert resolver.resolve("NOT_A_KEY") is None

    def test_resolve_fallback_only_when_absent(self):
        """An empty string is returned as-is, not replaced by the fallback."""
        resolver = ConfigResolver({"API_MODE": ""})
        assert resolver.resolve("API_MODE", "mock") == ""
        assert resolver.resolve("DEV_MODE", "false") == "false"

    @pytest.mark.parametrize("value", ["true", "1"])
    def test_resolve_bool_true_values(self, value):
        resolver = ConfigResolver({"FLAG": value})
        assert resolver.resolve_bool("FLAG") is True

    @pytest.mark.parametrize("value", ["yes", "TRUE", "True", "0", "false", "", " true"])
    def test_resolve_bool_other_strings_are_false(self, value):
        """Only the exact literals count as true."""
        resolver = ConfigResolver({"FLAG": value})
        assert resolver.resolve_bool("FLAG") is False

    def test_resolve_bool_fallback_when_absent(self):
        resolver = ConfigResolver({})
        assert resolver.resolve_bool("FLAG") is False
        assert resolver.resolve_bool("FLAG", fallback=True) is True

    def test_resolve_bool_set_value_ignores_fallback(self):
        """A present but unrecognized value is False even with a True fallback."""
        resolver = ConfigResolver({"FLAG": "yes"})
        assert resolver.resolve_bool("FLAG", fallback=True) is False

    def test_resolve_int(self):
        resolver = ConfigResolver({"PORT": " 8501 ", "BAD": "eighty"})
        assert resolver.resolve_int("PORT") == 8501
        assert resolver.resolve_int("BAD", fallback=80) == 80
        assert resolver.resolve_int("MISSING") is None


class TestRuntimeSettings:
    """Tests for RuntimeSettings loading."""

    @pytest.fixture(autouse=True)
    def _isolate(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("APP_ENVIRONMENT", "LOG_LEVEL", "SIGN_IN_URL", "SIGN_UP_URL", "ENV_FILE"):
            monkeypatch.delenv(name, raising=False)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_defaults(self):
        settings = config_load_settings()
        assert settings.execution_mode is ExecutionMode.DEVELOPMENT
        assert settings.sign_in_url == "/sign-in"
        assert settings.sign_up_url == "/sign-up"
        assert settings.log_level == "INFO"

    def test_production_mode_is_normalized(self, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", " Production ")
        settings = config_load_settings()
        assert settings.is_production is True

    def test_unknown_environment_is_development(self, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", "staging")
        assert config_load_settings().execution_mode is ExecutionMode.DEVELOPMENT

    def test_invalid_route_raises_settings_load_error(self, monkeypatch):
        monkeypatch.setenv("SIGN_IN_URL", "sign-in")
        with pytest.raises(SettingsLoadError, match="Runtime settings validation failed"):
            config_load_settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("APP_ENVIRONMENT=production\nLOG_LEVEL=debug\n")
        settings = RuntimeSettings()
        assert settings.is_production is True
        assert settings.log_level == "DEBUG"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
