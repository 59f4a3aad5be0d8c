"""
Name: Settings Tests

Responsibilities:
  - Production security guardrails
  - Backend selection (memory vs postgres)
  - Field validation
"""

import pytest
from projecthub.crosscutting.config import Settings
from pydantic import ValidationError

pytestmark = pytest.mark.unit

STRONG_SECRET = "s" * 40


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestProductionGuardrails:
    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValidationError, match="JWT_SECRET"):
            _settings(app_env="production")

    def test_short_secret_rejected_in_production(self):
        with pytest.raises(ValidationError, match="at least 32"):
            _settings(app_env="production", jwt_secret="short-but-not-default")

    def test_memory_backend_rejected_in_production(self):
        with pytest.raises(ValidationError, match="REPOSITORY_BACKEND"):
            _settings(
                app_env="production",
                jwt_secret=STRONG_SECRET,
                repository_backend="memory",
            )

    def test_strong_production_settings_accepted(self):
        settings = _settings(app_env="production", jwt_secret=STRONG_SECRET)
        assert settings.is_production()
        assert not settings.uses_memory_backend()


class TestBackendSelection:
    @pytest.mark.parametrize("env", ["test", "testing", "ci"])
    def test_test_envs_use_memory(self, env):
        assert _settings(app_env=env).uses_memory_backend()

    def test_explicit_memory_backend(self):
        settings = _settings(app_env="development", repository_backend="Memory")
        assert settings.repository_backend == "memory"
        assert settings.uses_memory_backend()

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            _settings(repository_backend="sqlite")


class TestFieldValidation:
    def test_max_message_chars_must_be_positive(self):
        with pytest.raises(ValidationError):
            _settings(max_message_chars=0)

    def test_pool_bounds(self):
        with pytest.raises(ValidationError, match="db_pool_max_size"):
            _settings(db_pool_min_size=5, db_pool_max_size=2)

    def test_origins_are_split_and_trimmed(self):
        settings = _settings(allowed_origins="https://a.dev, https://b.dev ,")
        assert settings.get_allowed_origins_list() == [
            "https://a.dev",
            "https://b.dev",
        ]
