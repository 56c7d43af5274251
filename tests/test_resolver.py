"""Tests for autocommit.resolver module."""

import pytest

from autocommit.global_config import (
    ConfigError,
    IncompleteConfigError,
    PersistedSettings,
)
from autocommit.resolver import (
    OverrideSet,
    RuntimeConfig,
    configure_settings,
    default_settings_for,
    merge_settings,
    parse_flag,
    resolve,
    resolve_api_key,
)
from autocommit.config import LLMProvider


@pytest.fixture
def groq_settings():
    """Persisted settings for Groq with no URL or key."""
    return PersistedSettings(
        provider="groq",
        model="llama-3.1-70b-versatile",
        base_url="",
        api_key="",
    )


class TestOverrideSetFromEnv:
    """Tests for OverrideSet.from_env."""

    def test_reads_autocommit_variables(self):
        overrides = OverrideSet.from_env({
            "AUTOCOMMIT_PROVIDER": "openai",
            "AUTOCOMMIT_MODEL": "gpt-4o",
            "AUTOCOMMIT_BASE_URL": "https://proxy.local/v1",
            "AUTOCOMMIT_API_KEY": "generic",
            "AUTOCOMMIT_MAX_DIFF_CHARS": "500",
            "AUTOCOMMIT_RELAX": "1",
            "AUTOCOMMIT_DEBUG": "0",
            "AUTOCOMMIT_WRITE_BACK": "1",
            "OLLAMA_HOST": "http://gpu:11434",
        })

        assert overrides.provider == "openai"
        assert overrides.model == "gpt-4o"
        assert overrides.base_url == "https://proxy.local/v1"
        assert overrides.api_key == "generic"
        assert overrides.max_diff_chars == "500"
        assert overrides.relax == "1"
        assert overrides.debug == "0"
        assert overrides.write_back == "1"
        assert overrides.ollama_host == "http://gpu:11434"

    def test_collects_provider_keys(self):
        overrides = OverrideSet.from_env({"GROQ_API_KEY": "abc", "GEMINI_API_KEY": "g", "PATH": "/bin"})

        assert overrides.provider_api_keys == {"GROQ_API_KEY": "abc", "GEMINI_API_KEY": "g"}

    def test_ignores_empty_provider_keys(self):
        overrides = OverrideSet.from_env({"GROQ_API_KEY": ""})

        assert overrides.provider_api_keys == {}

    def test_with_flags_sets_overrides(self):
        overrides = OverrideSet().with_flags(relax=True, debug=True)

        assert overrides.relax == "1"
        assert overrides.debug == "1"

    def test_with_flags_keeps_existing_when_unset(self):
        overrides = OverrideSet(relax="1").with_flags()

        assert overrides.relax == "1"
        assert overrides.debug is None


class TestFieldPrecedence:
    """Tests for the generic field merge."""

    @pytest.mark.parametrize("field,override,persisted", [
        ("provider", "openai", "groq"),
        ("model", "gpt-4o", "llama"),
        ("base_url", "https://override/v1", "https://persisted/v1"),
    ])
    def test_override_wins_over_persisted(self, field, override, persisted):
        """Test non-empty override beats the persisted value."""
        values = {"provider": "groq", "model": "llama"}
        values[field] = persisted
        settings = PersistedSettings(**values)
        config = resolve(settings, OverrideSet(**{field: override}))

        assert getattr(config, field) == override

    def test_empty_override_falls_back_to_persisted(self):
        settings = PersistedSettings(provider="groq", model="llama")
        config = resolve(settings, OverrideSet(provider="", model=""))

        assert config.provider == "groq"
        assert config.model == "llama"

    def test_flag_override_wins(self):
        settings = PersistedSettings(provider="groq", model="m", relax=False, debug=True)
        config = resolve(settings, OverrideSet(relax="1", debug="0"))

        assert config.relax is True
        assert config.debug is False

    def test_flags_from_persisted(self):
        settings = PersistedSettings(provider="groq", model="m", relax=True)
        config = resolve(settings, OverrideSet())

        assert config.relax is True
        assert config.debug is False
        assert config.write_back is False

    def test_max_diff_chars_override(self):
        settings = PersistedSettings(provider="groq", model="m", max_diff_chars=100)
        config = resolve(settings, OverrideSet(max_diff_chars="0"))

        assert config.max_diff_chars == 0

    def test_max_diff_chars_from_persisted(self):
        settings = PersistedSettings(provider="groq", model="m", max_diff_chars=100)
        config = resolve(settings, OverrideSet())

        assert config.max_diff_chars == 100

    def test_max_diff_chars_default(self):
        config = resolve(PersistedSettings(provider="groq", model="m"), OverrideSet())

        assert config.max_diff_chars == 15360

    def test_invalid_max_diff_chars_raises(self):
        with pytest.raises(ConfigError):
            resolve(PersistedSettings(provider="groq", model="m"), OverrideSet(max_diff_chars="lots"))


class TestBaseUrlDefaults:
    """Tests for provider base URL derivation."""

    def test_groq_default(self, groq_settings):
        config = resolve(groq_settings, OverrideSet())

        assert config.base_url == "https://api.groq.com/openai/v1"

    def test_ollama_host_override(self):
        settings = PersistedSettings(provider="ollama", model="llama3")
        config = resolve(settings, OverrideSet(ollama_host="http://gpu:11434"))

        assert config.base_url == "http://gpu:11434"

    def test_persisted_url_kept(self):
        settings = PersistedSettings(provider="groq", model="m", base_url="https://mirror/v1")
        config = resolve(settings, OverrideSet())

        assert config.base_url == "https://mirror/v1"

    def test_custom_without_url_stays_empty(self):
        settings = PersistedSettings(provider="custom", model="m")
        config = resolve(settings, OverrideSet())

        assert config.base_url == ""


class TestApiKeyPrecedence:
    """Tests for the API key resolution chain."""

    def test_generic_key_beats_provider_key(self, groq_settings):
        overrides = OverrideSet(api_key="generic", provider_api_keys={"GROQ_API_KEY": "specific"})
        config = resolve(groq_settings, overrides)

        assert config.api_key == "generic"

    def test_provider_key_used_without_generic(self, groq_settings):
        overrides = OverrideSet(provider_api_keys={"GROQ_API_KEY": "specific"})
        config = resolve(groq_settings, overrides)

        assert config.api_key == "specific"

    def test_provider_key_beats_persisted(self):
        settings = PersistedSettings(provider="groq", model="m", api_key="stored")
        overrides = OverrideSet(provider_api_keys={"GROQ_API_KEY": "specific"})

        assert resolve(settings, overrides).api_key == "specific"

    def test_persisted_key_is_last_resort(self):
        settings = PersistedSettings(provider="groq", model="m", api_key="stored")

        assert resolve(settings, OverrideSet()).api_key == "stored"

    def test_other_provider_keys_ignored(self):
        settings = PersistedSettings(provider="groq", model="m")
        overrides = OverrideSet(provider_api_keys={"OPENAI_API_KEY": "openai"})

        assert resolve(settings, overrides).api_key == ""

    def test_google_falls_back_to_gemini_key(self):
        overrides = OverrideSet(provider_api_keys={"GEMINI_API_KEY": "gem"})

        assert resolve_api_key("google", "", overrides) == "gem"

    def test_google_prefers_google_key(self):
        overrides = OverrideSet(provider_api_keys={"GEMINI_API_KEY": "gem", "GOOGLE_API_KEY": "goo"})

        assert resolve_api_key("google", "", overrides) == "goo"

    def test_ollama_always_empty(self):
        settings = PersistedSettings(provider="ollama", model="llama3", api_key="stored")
        overrides = OverrideSet(api_key="generic")

        assert resolve(settings, overrides).api_key == ""


class TestValidation:
    """Tests for required-field validation."""

    def test_missing_model_raises(self):
        with pytest.raises(IncompleteConfigError) as exc_info:
            resolve(PersistedSettings(provider="groq"), OverrideSet())

        assert "autocommit configure" in str(exc_info.value)

    def test_missing_provider_raises(self):
        with pytest.raises(IncompleteConfigError):
            resolve(PersistedSettings(model="gpt-4o"), OverrideSet())

    def test_empty_everything_raises(self):
        with pytest.raises(IncompleteConfigError):
            resolve(PersistedSettings(), OverrideSet())

    def test_merge_settings_allows_missing_model(self):
        config = merge_settings(PersistedSettings(), OverrideSet(provider="groq"))

        assert config.provider == "groq"
        assert config.model == ""
        assert config.base_url == "https://api.groq.com/openai/v1"

    def test_incomplete_config_does_not_write_back(self):
        stored = []
        with pytest.raises(IncompleteConfigError):
            resolve(PersistedSettings(provider="groq", write_back=True), OverrideSet(), store=stored.append)

        assert stored == []


class TestWriteBack:
    """Tests for persisting the resolved configuration."""

    def test_writes_resolved_config(self, groq_settings):
        stored = []
        overrides = OverrideSet(write_back="1", provider_api_keys={"GROQ_API_KEY": "abc"})

        resolve(groq_settings, overrides, store=stored.append)

        assert len(stored) == 1
        saved = stored[0]
        assert saved.provider == "groq"
        assert saved.api_key == "abc"
        assert saved.base_url == "https://api.groq.com/openai/v1"
        assert saved.write_back is True
        assert saved.updated_at

    def test_keeps_created_at(self):
        settings = PersistedSettings(provider="groq", model="m", write_back=True, created_at="2024-01-01 10:00:00")
        stored = []

        resolve(settings, OverrideSet(), store=stored.append)

        assert stored[0].created_at == "2024-01-01 10:00:00"

    def test_no_write_when_disabled(self, groq_settings):
        stored = []

        resolve(groq_settings, OverrideSet(), store=stored.append)

        assert stored == []

    def test_defaults_to_save_settings(self, groq_settings, mocker):
        mock_save = mocker.patch("autocommit.resolver.save_settings")

        resolve(groq_settings, OverrideSet(write_back="1"))

        mock_save.assert_called_once()


class TestEndToEnd:
    """End-to-end resolution scenarios."""

    def test_groq_with_provider_key(self, groq_settings):
        overrides = OverrideSet.from_env({"GROQ_API_KEY": "abc123"})
        config = resolve(groq_settings, overrides)

        assert isinstance(config, RuntimeConfig)
        assert config.base_url == "https://api.groq.com/openai/v1"
        assert config.api_key == "abc123"


class TestParseFlag:
    """Tests for parse_flag."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " 1 "])
    def test_truthy(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "2"])
    def test_falsy(self, value):
        assert parse_flag(value) is False


class TestConfigureHelpers:
    """Tests for configure_settings and default_settings_for."""

    def test_default_settings_for_groq(self):
        overrides = OverrideSet(provider_api_keys={"GROQ_API_KEY": "abc"})
        defaults = default_settings_for(LLMProvider.GROQ, overrides)

        assert defaults == {
            "base_url": "https://api.groq.com/openai/v1",
            "model": "llama-3.1-70b-versatile",
            "api_key": "abc",
        }

    def test_default_settings_respect_overrides(self):
        overrides = OverrideSet(model="gpt-4o-mini", base_url="https://proxy/v1")
        defaults = default_settings_for(LLMProvider.OPENAI, overrides)

        assert defaults["model"] == "gpt-4o-mini"
        assert defaults["base_url"] == "https://proxy/v1"

    def test_default_settings_for_custom_are_empty(self):
        defaults = default_settings_for(LLMProvider.CUSTOM, OverrideSet(model="x"))

        assert defaults == {"base_url": "", "model": "", "api_key": ""}

    def test_configure_settings_saves(self):
        stored = []
        settings = configure_settings(
            provider="ollama",
            model="llama3",
            base_url="http://localhost:11434",
            api_key="",
            relax=False,
            debug=True,
            max_diff_chars=0,
            write_back=False,
            store=stored.append,
        )

        assert stored == [settings]
        assert settings.created_at
        assert settings.debug is True
        assert settings.max_diff_chars == 0

    def test_configure_settings_requires_model(self):
        with pytest.raises(IncompleteConfigError):
            configure_settings("groq", "", "", "", False, False, 0, False, store=lambda _: None)
