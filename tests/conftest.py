"""Pytest fixtures for deploy tests against mocked AWS."""

from collections.abc import Iterator
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from static_site_deploy.provider import AwsHostingProvider

REGION = "eu-central-1"
SITE = "example-site"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
  """Keep boto3 away from real credentials."""
  monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
  monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
  monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
  monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
  monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
  monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def aws() -> Iterator[None]:
  """Run the test inside moto's AWS mock."""
  with mock_aws():
    yield


@pytest.fixture
def provider(aws: None) -> AwsHostingProvider:
  """Provider wired to mocked S3 and CloudFront clients."""
  return AwsHostingProvider(
    boto3.client("s3", region_name=REGION),
    boto3.client("cloudfront", region_name="us-east-1"),
    REGION,
  )


@pytest.fixture
def site_folder(tmp_path: Path) -> Path:
  """A built site with a root page and one nested asset."""
  root = tmp_path / "dist"
  (root / "assets").mkdir(parents=True)
  (root / "index.html").write_text("<html><body>hello</body></html>")
  (root / "assets" / "app.js").write_text("console.log('hello');")
  return root
