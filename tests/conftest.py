"""
Test Configuration
==================

Pytest configuration with shared fixtures: test settings, sample datamodels
and generator options.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator, Dict, Any
from unittest.mock import patch

from pydantic_settings import SettingsConfigDict

from prisma_zod_mock.config.settings import Settings
from prisma_zod_mock.config.generator_config import GeneratorConfig
from prisma_zod_mock.models.schemas import Datamodel, DMMFModel

from tests.utils.data_generators import DMMFDataGenerator


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    unique_max_attempts: int = 1000
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings):
    """Override application settings for testing."""
    with patch("prisma_zod_mock.config.settings.settings", test_settings):
        yield test_settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for generated files."""
    temp_path = Path(tempfile.mkdtemp(prefix="prisma_zod_mock_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def default_config() -> GeneratorConfig:
    """Generator configuration with all defaults."""
    return GeneratorConfig()


@pytest.fixture
def blog_datamodel_data() -> Dict[str, Any]:
    """Raw blog datamodel (User, Post, Profile, Role)."""
    return DMMFDataGenerator.generate_blog_datamodel()


@pytest.fixture
def blog_datamodel(blog_datamodel_data: Dict[str, Any]) -> Datamodel:
    """Parsed blog datamodel."""
    return Datamodel.model_validate(blog_datamodel_data)


@pytest.fixture
def simple_datamodel() -> Datamodel:
    """Parsed single-model datamodel."""
    return DMMFDataGenerator.build_datamodel(DMMFDataGenerator.generate_simple_datamodel())


@pytest.fixture
def user_model(blog_datamodel: Datamodel) -> DMMFModel:
    model = blog_datamodel.get_model("User")
    assert model is not None
    return model


@pytest.fixture
def post_model(blog_datamodel: Datamodel) -> DMMFModel:
    model = blog_datamodel.get_model("Post")
    assert model is not None
    return model
