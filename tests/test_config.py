"""Tests for FilDOS configuration."""

import os
from unittest import mock

import pytest
from pydantic import ValidationError

from fildos import FilDOSConfig

ADDRESS = "0x" + "ab" * 20

# Environment variables to clear for isolated tests
FILDOS_ENV_VARS = [
    "FILDOS_ADDRESS",
    "FILDOS_AI_SERVICE_URL",
    "AI_SERVICE_URL",
    "FILDOS_SEARCH_TIMEOUT",
    "FILDOS_PROVENANCE_TAG",
    "FILDOS_INITIAL_BALANCE_WEI",
    "FILDOS_LOG_LEVEL",
]


@pytest.fixture
def clean_env():
    """Clear all FilDOS environment variables for isolated tests."""
    original = {k: os.environ.get(k) for k in FILDOS_ENV_VARS}
    for k in FILDOS_ENV_VARS:
        os.environ.pop(k, None)
    yield
    # Restore original values
    for k, v in original.items():
        if v is not None:
            os.environ[k] = v
        else:
            os.environ.pop(k, None)


def make_config(**kwargs) -> FilDOSConfig:
    """Create a FilDOSConfig with test defaults."""
    defaults = {"address": ADDRESS}
    defaults.update(kwargs)
    return FilDOSConfig(_env_file=None, **defaults)


@pytest.mark.usefixtures("clean_env")
class TestFilDOSConfigRequiredFields:
    """Test FilDOSConfig required fields."""

    def test_address_is_required(self):
        with pytest.raises(ValidationError):
            FilDOSConfig(_env_file=None)

    def test_address_must_be_hex(self):
        with pytest.raises(ValidationError):
            make_config(address="alice")
        with pytest.raises(ValidationError):
            make_config(address="0x1234")


@pytest.mark.usefixtures("clean_env")
class TestFilDOSConfigDefaults:
    """Test FilDOSConfig default values for optional fields."""

    def test_default_ai_service_url(self):
        config = make_config()
        assert str(config.ai_service_url) == "http://localhost:5000/"

    def test_default_search_timeout(self):
        assert make_config().search_timeout == 30.0

    def test_default_provenance_tag(self):
        assert make_config().provenance_tag == "uploaded-via-mcp"

    def test_default_balance(self):
        assert make_config().initial_balance_wei == 0

    def test_default_log_level(self):
        assert make_config().log_level == "INFO"


@pytest.mark.usefixtures("clean_env")
class TestFilDOSConfigEnvironment:
    """Test FilDOSConfig loading from environment variables."""

    def test_prefixed_variables(self):
        env = {
            "FILDOS_ADDRESS": ADDRESS,
            "FILDOS_SEARCH_TIMEOUT": "5",
            "FILDOS_PROVENANCE_TAG": "agent-upload",
        }
        with mock.patch.dict(os.environ, env):
            config = FilDOSConfig(_env_file=None)

        assert config.address == ADDRESS
        assert config.search_timeout == 5.0
        assert config.provenance_tag == "agent-upload"

    def test_unprefixed_ai_service_url(self):
        env = {"FILDOS_ADDRESS": ADDRESS, "AI_SERVICE_URL": "http://search.internal:8000"}
        with mock.patch.dict(os.environ, env):
            config = FilDOSConfig(_env_file=None)

        assert str(config.ai_service_url) == "http://search.internal:8000/"


@pytest.mark.usefixtures("clean_env")
class TestFilDOSConfigValidation:
    """Test FilDOSConfig validation."""

    def test_ai_service_url_must_be_valid_url(self):
        with pytest.raises(ValidationError):
            make_config(ai_service_url="not-a-url")

    def test_search_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_config(search_timeout=0)

    def test_provenance_tag_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            make_config(provenance_tag="")

    def test_balance_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            make_config(initial_balance_wei=-1)
