"""Deploy sequence: bucket, upload, distribution, invalidation."""

import logging
from pathlib import Path

from .config import (
  DEFAULT_CONCURRENCY,
  DEFAULT_ERROR_DOCUMENT,
  DEFAULT_INDEX_DOCUMENT,
  DEFAULT_REGION,
  SiteConfig,
)
from .distribution import DistributionResolver
from .invalidation import CacheInvalidator
from .models import DeployRequest
from .provider import AwsHostingProvider
from .storage import BucketProvisioner
from .uploader import ObjectUploader

logger = logging.getLogger(__name__)


class StaticSiteDeployer:
  """Publish one local folder as a static site.

  Each stage runs only after the previous one succeeded. Failures propagate
  unchanged; ``run_deploy`` turns them into an exit status.
  """

  def __init__(
    self,
    request: DeployRequest,
    provider: AwsHostingProvider,
    *,
    index_document: str = DEFAULT_INDEX_DOCUMENT,
    error_document: str = DEFAULT_ERROR_DOCUMENT,
    concurrency: int = DEFAULT_CONCURRENCY,
  ) -> None:
    self.request = request
    self.provider = provider
    self.provisioner = BucketProvisioner(
      provider,
      index_document=index_document,
      error_document=error_document,
    )
    self.uploader = ObjectUploader(provider, request.upload_folder, concurrency=concurrency)
    self.resolver = DistributionResolver(provider, index_document=index_document)
    self.invalidator = CacheInvalidator(provider, self.resolver)

  @classmethod
  def from_site_config(
    cls,
    site: SiteConfig,
    provider: AwsHostingProvider | None = None,
  ) -> "StaticSiteDeployer":
    provider = provider or AwsHostingProvider.from_region(site.region, site.profile)
    return cls(
      DeployRequest(site_name=site.name, upload_folder=site.folder),
      provider,
      index_document=site.index_document,
      error_document=site.error_document,
      concurrency=site.concurrency,
    )

  @classmethod
  def from_options(
    cls,
    site_name: str,
    upload_folder: Path | str,
    *,
    region: str = DEFAULT_REGION,
    profile: str | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
  ) -> "StaticSiteDeployer":
    """Build a deployer from a site name and folder, like the CLI does."""
    site = SiteConfig(
      name=site_name,
      folder=Path(upload_folder),
      region=region,
      profile=profile,
      concurrency=concurrency,
    )
    return cls.from_site_config(site)

  def deploy(self) -> list[str]:
    """Run the deploy and return the invalidated keys."""
    site_name = self.request.site_name

    self.provisioner.ensure(site_name)

    uploaded = self.uploader.upload_folder(site_name)
    keys = [item.key for item in uploaded if item]

    self.invalidator.invalidate(site_name, keys)

    logger.info("Upload done.")
    return keys


def run_deploy(deployer: StaticSiteDeployer) -> int:
  """Run a deploy and map any failure to exit status 1."""
  try:
    deployer.deploy()
  except Exception as e:
    logger.error(f"Deploy of {deployer.request.site_name} failed: {e}")
    logger.debug("Deploy failure details", exc_info=True)
    return 1
  return 0
