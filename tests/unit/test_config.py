"""
Name: Drive Settings Tests

Responsibilities:
  - Validate env parsing and validation of DriveSettings
  - Validate derivation of the immutable S3DriverConfig
"""

import dataclasses

import pytest
from pydantic import ValidationError

from drive_s3.crosscutting.config import DriveSettings
from drive_s3.domain.entities import Visibility

pytestmark = pytest.mark.unit


def test_settings_read_env(monkeypatch):
    monkeypatch.setenv("S3_KEY", "AKIA")
    monkeypatch.setenv("S3_SECRET", "shh")
    monkeypatch.setenv("S3_BUCKET", "docs")
    monkeypatch.setenv("S3_REGION", "eu-west-1")
    monkeypatch.setenv("S3_ENDPOINT", "http://minio:9000/")
    monkeypatch.setenv("S3_CDN_URL", "https://cdn.example.com/")
    monkeypatch.setenv("DRIVE_VISIBILITY", "PUBLIC")

    settings = DriveSettings()

    assert settings.s3_bucket == "docs"
    assert settings.s3_endpoint == "http://minio:9000"
    assert settings.s3_cdn_url == "https://cdn.example.com"
    assert settings.drive_visibility == "public"


def test_invalid_visibility_rejected(monkeypatch):
    monkeypatch.setenv("DRIVE_VISIBILITY", "world")

    with pytest.raises(ValidationError):
        DriveSettings()


def test_to_driver_config():
    settings = DriveSettings(
        s3_key="AKIA",
        s3_secret="shh",
        s3_bucket=" docs ",
        s3_region="eu-west-1",
        s3_cdn_url="https://cdn.example.com/",
        drive_visibility="public",
        s3_force_path_style=True,
    )

    config = settings.to_driver_config()

    assert config.bucket == "docs"
    assert config.region == "eu-west-1"
    assert config.endpoint is None
    assert config.key == "AKIA"
    assert config.secret == "shh"
    assert config.session_token is None
    assert config.visibility is Visibility.PUBLIC
    assert config.cdn_url == "https://cdn.example.com"
    assert config.force_path_style is True


def test_driver_config_is_immutable():
    config = DriveSettings(s3_bucket="docs").to_driver_config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.bucket = "other"  # type: ignore[misc]
