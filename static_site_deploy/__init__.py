"""Deploy a pre-built static website to S3 behind CloudFront."""

from .config import DeployConfig, SiteConfig
from .deployer import StaticSiteDeployer, run_deploy
from .exceptions import (
  ConfigError,
  DeployError,
  InvalidationError,
  ProvisionError,
  ResolutionError,
  UploadError,
)
from .provider import AwsHostingProvider

__all__ = [
  "AwsHostingProvider",
  "ConfigError",
  "DeployConfig",
  "DeployError",
  "InvalidationError",
  "ProvisionError",
  "ResolutionError",
  "SiteConfig",
  "StaticSiteDeployer",
  "UploadError",
  "run_deploy",
]
