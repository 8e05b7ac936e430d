"""
Name: S3 Driver URL Tests

Responsibilities:
  - Validate get_url for CDN, default public endpoint and custom endpoints
  - Validate the CDN base URL is normalised only by DriveSettings
  - Validate get_url never talks to the storage service
  - Validate expiry parsing for signed URLs
"""

import pytest

from drive_s3.crosscutting.config import DriveSettings
from drive_s3.infrastructure.storage import S3Driver, S3DriverConfig, parse_expires_in

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_default_endpoint_uses_virtual_hosted_url():
    driver = S3Driver(
        S3DriverConfig(
            bucket="docs",
            region="us-east-1",
            endpoint="https://s3.amazonaws.com",
            key="testing",
            secret="testing",
        )
    )

    assert await driver.get_url("a/b.txt") == "https://docs.s3.amazonaws.com/a/b.txt"


@pytest.mark.asyncio
async def test_resolved_default_endpoint_uses_virtual_hosted_url():
    driver = S3Driver(
        S3DriverConfig(bucket="docs", region="us-east-1", key="testing", secret="testing")
    )

    assert driver.config.endpoint is None
    assert driver.adapter.meta.endpoint_url.startswith("https://s3.amazonaws")
    assert await driver.get_url("a/b.txt") == "https://docs.s3.amazonaws.com/a/b.txt"


@pytest.mark.asyncio
async def test_cdn_url_from_settings_is_normalised_once(monkeypatch, mock_client):
    monkeypatch.setenv("S3_BUCKET", "docs")
    monkeypatch.setenv("S3_CDN_URL", "https://cdn.example.com/")
    config = DriveSettings().to_driver_config()

    driver = S3Driver(config, client=mock_client)

    assert config.cdn_url == "https://cdn.example.com"
    assert await driver.get_url("a/b.txt") == "https://cdn.example.com/a/b.txt"


@pytest.mark.asyncio
async def test_cdn_url_wins_over_endpoint(make_driver):
    driver = make_driver(
        cdn_url="https://cdn.example.com", endpoint="http://minio:9000"
    )

    assert await driver.get_url("a/b.txt") == "https://cdn.example.com/a/b.txt"


@pytest.mark.asyncio
async def test_custom_endpoint_uses_path_style_url(make_driver, mock_client):
    mock_client.meta.endpoint_url = "http://minio:9000/"
    driver = make_driver()

    assert await driver.get_url("a/b.txt") == "http://minio:9000/docs/a/b.txt"


@pytest.mark.asyncio
async def test_regional_endpoint_uses_path_style_url(make_driver, mock_client):
    mock_client.meta.endpoint_url = "https://s3.eu-west-1.amazonaws.com"
    driver = make_driver()

    assert (
        await driver.get_url("a/b.txt")
        == "https://s3.eu-west-1.amazonaws.com/docs/a/b.txt"
    )


@pytest.mark.asyncio
async def test_get_url_is_pure(make_driver, mock_client):
    driver = make_driver()

    first = await driver.get_url("a/b.txt")
    second = await driver.get_url("a/b.txt")

    assert first == second
    assert mock_client.method_calls == []


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 900),
        (60, 60),
        ("3600", 3600),
        ("30s", 30),
        ("15m", 900),
        ("30 mins", 1800),
        ("2h", 7200),
        ("1d", 86400),
    ],
)
def test_parse_expires_in(value, expected):
    assert parse_expires_in(value) == expected


@pytest.mark.parametrize("value", ["forever", "10 weeks", "", 0, -5, True])
def test_parse_expires_in_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_expires_in(value)
