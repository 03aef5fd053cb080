"""CloudFront distribution lookup and creation for a site alias."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .config import DEFAULT_INDEX_DOCUMENT
from .exceptions import ResolutionError
from .models import Distribution, caller_reference
from .provider import AwsHostingProvider

logger = logging.getLogger(__name__)

DEFAULT_COMMENT = "Created by static-site-deploy"


def origin_domain(bucket_name: str) -> str:
  """Default S3 endpoint of the bucket backing the site."""
  return f"{bucket_name}.s3.amazonaws.com"


def build_distribution_config(
  alias: str,
  *,
  index_document: str = DEFAULT_INDEX_DOCUMENT,
  comment: str = DEFAULT_COMMENT,
  reference: str | None = None,
) -> dict[str, Any]:
  """Build a DistributionConfig serving the alias' bucket over HTTPS.

  ``reference`` is the CallerReference and must differ between create calls;
  it defaults to the current time in milliseconds.
  """
  reference = reference or caller_reference()
  origin_id = f"{alias}-{reference}"

  return {
    "CallerReference": reference,
    "Comment": comment,
    "Enabled": True,
    "Origins": {
      "Quantity": 1,
      "Items": [
        {
          "Id": origin_id,
          "DomainName": origin_domain(alias),
          "OriginPath": "",
          "S3OriginConfig": {"OriginAccessIdentity": ""},
        }
      ],
    },
    "DefaultCacheBehavior": {
      "TargetOriginId": origin_id,
      "ForwardedValues": {
        "QueryString": True,
        "Cookies": {"Forward": "all"},
      },
      "TrustedSigners": {"Enabled": False, "Quantity": 0},
      "ViewerProtocolPolicy": "redirect-to-https",
      "MinTTL": 0,
      "Compress": True,
    },
    "Aliases": {"Quantity": 1, "Items": [alias]},
    "DefaultRootObject": index_document,
    "HttpVersion": "http2",
    "IsIPV6Enabled": True,
    "ViewerCertificate": {
      "CloudFrontDefaultCertificate": True,
    },
  }


class DistributionResolver:
  """Find the distribution bound to an alias, creating one when missing.

  The list-then-create sequence is not atomic: two deploys of the same alias
  running at once can each create a distribution.
  """

  def __init__(
    self,
    provider: AwsHostingProvider,
    *,
    index_document: str = DEFAULT_INDEX_DOCUMENT,
  ) -> None:
    self.provider = provider
    self.index_document = index_document

  def find(self, alias: str) -> Distribution | None:
    try:
      distributions = self.provider.list_distributions()
    except (ClientError, BotoCoreError) as e:
      raise ResolutionError(f"Failed to list CloudFront distributions: {e}") from e

    matches = [d for d in distributions if alias in d.aliases]
    return matches[0] if matches else None

  def create(self, alias: str) -> str:
    config = build_distribution_config(alias, index_document=self.index_document)
    try:
      distribution_id = self.provider.create_distribution(config)
    except (ClientError, BotoCoreError) as e:
      raise ResolutionError(f"Failed to create distribution for '{alias}': {e}") from e

    logger.info(f"Created CloudFront distribution {distribution_id} for {alias}")
    return distribution_id

  def resolve(self, alias: str) -> str:
    """Return the id of the distribution aliased to ``alias``."""
    distribution = self.find(alias)
    if distribution:
      logger.debug(f"Found CloudFront distribution {distribution.id} for {alias}")
      return distribution.id
    return self.create(alias)
