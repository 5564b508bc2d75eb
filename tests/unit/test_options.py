"""
Tests for ExtractionOptions validation and loading (env, YAML).
"""

import pytest

from jobsift.contexts.intake.options import ENV_VARS, ExtractionOptions


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every extraction variable so tests see only what they set."""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    return monkeypatch


@pytest.mark.unit
def test_defaults():
    options = ExtractionOptions()
    assert options.endpoint == "https://openrouter.ai/api/v1"
    assert options.model == "openai/gpt-4o-mini"
    assert options.max_retries == 3
    assert options.timeout_seconds == 30
    assert options.max_text_length == 10000
    assert options.has_credential is False


@pytest.mark.unit
def test_whitespace_credential_is_missing():
    assert ExtractionOptions(credential="   ").has_credential is False
    assert ExtractionOptions(credential="sk-test").has_credential is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"max_retries": -1},
        {"max_retries": 11},
        {"timeout_seconds": 0},
        {"timeout_seconds": 301},
        {"max_text_length": 0},
        {"max_text_length": 100001},
        {"endpoint": "ftp://example.com"},
        {"model": ""},
        {"model": "m" * 101},
        {"failure_threshold": 0},
    ],
)
def test_out_of_range_values_rejected(overrides):
    with pytest.raises(ValueError):
        ExtractionOptions(**overrides)


@pytest.mark.unit
def test_range_boundaries_accepted():
    options = ExtractionOptions(max_retries=10, timeout_seconds=300, max_text_length=1)
    assert options.max_retries == 10


@pytest.mark.unit
def test_from_env(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "sk-env")
    clean_env.setenv("OPENROUTER_MODEL", "anthropic/claude-3-haiku")
    clean_env.setenv("EXTRACTION_MAX_RETRIES", "5")
    clean_env.setenv("EXTRACTION_TIMEOUT_SECONDS", "45")

    options = ExtractionOptions.from_env()

    assert options.credential == "sk-env"
    assert options.model == "anthropic/claude-3-haiku"
    assert options.max_retries == 5
    assert options.timeout_seconds == 45
    assert options.endpoint == "https://openrouter.ai/api/v1"


@pytest.mark.unit
def test_from_env_without_variables(clean_env):
    assert ExtractionOptions.from_env() == ExtractionOptions()


@pytest.mark.unit
def test_from_env_invalid_value(clean_env):
    clean_env.setenv("EXTRACTION_MAX_TEXT_LENGTH", "999999")
    with pytest.raises(ValueError):
        ExtractionOptions.from_env()


@pytest.mark.unit
def test_from_yaml_nested_with_env_interpolation(tmp_path, clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "sk-yaml")
    config = tmp_path / "extraction.yaml"
    config.write_text(
        "extraction:\n"
        "  credential: ${oc.env:OPENROUTER_API_KEY}\n"
        "  max_retries: 1\n"
        "  recovery_timeout_seconds: 12.5\n"
        "  app_title: JobSift\n",
        encoding="utf-8",
    )

    options = ExtractionOptions.from_yaml(config)

    assert options.credential == "sk-yaml"
    assert options.max_retries == 1
    assert options.recovery_timeout_seconds == 12.5
    assert options.app_title == "JobSift"


@pytest.mark.unit
def test_from_yaml_flat(tmp_path):
    config = tmp_path / "extraction.yaml"
    config.write_text("model: openai/gpt-4o\ntimeout_seconds: 10\n", encoding="utf-8")

    options = ExtractionOptions.from_yaml(config)

    assert options.model == "openai/gpt-4o"
    assert options.timeout_seconds == 10


@pytest.mark.unit
def test_from_yaml_unknown_key(tmp_path):
    config = tmp_path / "extraction.yaml"
    config.write_text("extraction:\n  retries: 3\n", encoding="utf-8")

    with pytest.raises(ValueError, match="retries"):
        ExtractionOptions.from_yaml(config)
