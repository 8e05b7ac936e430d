"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Isolate settings from any local .env file
  - Provide fake AWS credentials and a moto-backed S3 bucket
  - Provide drivers wired to a moto client or to a MagicMock client

Collaborators:
  - pytest / pytest-asyncio
  - moto: in-process S3
  - unittest.mock: client doubles

Notes:
  - moto must be active before the boto3 client is created
  - Fixtures are per-test (function scope) for isolation
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from drive_s3.crosscutting import config as drive_config  # noqa: E402

drive_config.DriveSettings.model_config["env_file"] = None

from drive_s3.domain.entities import Visibility  # noqa: E402
from drive_s3.infrastructure.storage import S3Driver, S3DriverConfig  # noqa: E402

TEST_BUCKET_NAME = "docs"
TEST_REGION = "us-east-1"

os.environ.setdefault("AWS_DEFAULT_REGION", TEST_REGION)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def driver_config() -> S3DriverConfig:
    """R: Config apuntando al bucket de test (credenciales falsas)."""
    return S3DriverConfig(
        bucket=TEST_BUCKET_NAME,
        region=TEST_REGION,
        key="testing",
        secret="testing",
    )


@pytest.fixture(autouse=True)
def clean_drive_env(monkeypatch) -> None:
    """R: Ninguna variable del entorno del dev debe filtrarse a los tests."""
    for name in (
        "S3_KEY",
        "S3_SECRET",
        "S3_SESSION_TOKEN",
        "S3_BUCKET",
        "S3_REGION",
        "S3_ENDPOINT",
        "S3_CDN_URL",
        "S3_FORCE_PATH_STYLE",
        "DRIVE_VISIBILITY",
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# moto (S3 in-process)
# ============================================================================


@pytest.fixture
def aws_credentials(monkeypatch) -> None:
    """R: Credenciales falsas para que boto3 nunca use las reales."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def mocked_aws(aws_credentials):
    """R: S3 en memoria con el bucket de test creado (ACLs habilitadas)."""
    with mock_aws():
        boto3.client("s3", region_name=TEST_REGION).create_bucket(
            Bucket=TEST_BUCKET_NAME,
            ObjectOwnership="ObjectWriter",
        )
        yield


@pytest.fixture
def s3_driver(mocked_aws, driver_config: S3DriverConfig) -> S3Driver:
    """R: Driver real contra moto."""
    return S3Driver(driver_config)


# ============================================================================
# Mock client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> MagicMock:
    """
    R: Cliente boto3 falso.

    Pre-configured behaviors:
    - meta.endpoint_url is the default public S3 endpoint
    - get_object_acl() returns a private ACL (owner only)
    """
    client = MagicMock()
    client.meta.endpoint_url = "https://s3.amazonaws.com"
    client.get_object_acl.return_value = {
        "Grants": [
            {
                "Grantee": {"Type": "CanonicalUser", "ID": "owner"},
                "Permission": "FULL_CONTROL",
            }
        ]
    }
    return client


@pytest.fixture
def make_driver(mock_client: MagicMock):
    """R: Factory de drivers con el cliente falso inyectado."""

    def _make(**overrides) -> S3Driver:
        params = {"bucket": TEST_BUCKET_NAME, "visibility": Visibility.PRIVATE}
        params.update(overrides)
        return S3Driver(S3DriverConfig(**params), client=mock_client)

    return _make
