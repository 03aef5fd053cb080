"""CloudFront cache invalidation after a deploy."""

import logging
from collections.abc import Iterable

from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from .distribution import DistributionResolver
from .exceptions import InvalidationError
from .models import InvalidationBatch
from .provider import AwsHostingProvider

logger = logging.getLogger(__name__)


class CacheInvalidator:
  """Submit invalidations for uploaded paths on the site's distribution."""

  def __init__(self, provider: AwsHostingProvider, resolver: DistributionResolver) -> None:
    self.provider = provider
    self.resolver = resolver

  def invalidate(self, site_name: str, paths: Iterable[str]) -> str | None:
    """Request invalidation of ``paths``; returns the invalidation id.

    The request is fire-and-forget: this returns once CloudFront accepts it.
    """
    distribution_id = self.resolver.resolve(site_name)
    if not distribution_id:
      logger.info("No Cloudfront distribution found. Skipping cache invalidation.")
      return None

    batch = InvalidationBatch(distribution_id=distribution_id, paths=tuple(paths))
    if not batch.paths:
      logger.info("Nothing uploaded. Skipping cache invalidation.")
      return None

    try:
      invalidation_id = self.provider.create_invalidation(batch)
    except (ClientError, BotoCoreError) as e:
      raise InvalidationError(
        f"Failed to invalidate {len(batch.paths)} paths on {distribution_id}: {e}"
      ) from e

    logger.info(
      f"Created invalidation {invalidation_id} for {len(batch.paths)} paths "
      f"on distribution {distribution_id}"
    )
    return invalidation_id

  def wait_for_completion(self, distribution_id: str, invalidation_id: str) -> None:
    """Block until CloudFront reports the invalidation as completed."""
    try:
      self.provider.wait_for_invalidation(distribution_id, invalidation_id)
    except (WaiterError, ClientError) as e:
      raise InvalidationError(f"Invalidation {invalidation_id} did not complete: {e}") from e
    logger.info(f"Invalidation {invalidation_id} completed")
