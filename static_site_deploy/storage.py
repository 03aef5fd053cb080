"""S3 bucket for static website hosting."""

import logging

from botocore.exceptions import BotoCoreError, ClientError

from .config import DEFAULT_ERROR_DOCUMENT, DEFAULT_INDEX_DOCUMENT
from .exceptions import ProvisionError
from .models import Outcome
from .provider import AwsHostingProvider

logger = logging.getLogger(__name__)


class BucketProvisioner:
  """Create a bucket (idempotently) and configure it for website hosting."""

  def __init__(
    self,
    provider: AwsHostingProvider,
    *,
    index_document: str = DEFAULT_INDEX_DOCUMENT,
    error_document: str = DEFAULT_ERROR_DOCUMENT,
  ) -> None:
    self.provider = provider
    self.index_document = index_document
    self.error_document = error_document

  def ensure(self, bucket_name: str) -> Outcome:
    """Make sure the bucket exists and serves website content.

    Returns ``Outcome.OK`` for a new bucket and ``Outcome.ALREADY_EXISTS``
    when the caller already owns it.
    """
    result = self.provider.create_bucket(bucket_name)
    if not result.succeeded:
      raise ProvisionError(f"Failed to create bucket '{bucket_name}': {result.reason}")

    if result.outcome is Outcome.ALREADY_EXISTS:
      logger.info(f"Bucket '{bucket_name}' already exists and is owned by you. Proceeding.")
    else:
      logger.info(f"Created bucket '{bucket_name}' in {self.provider.region}")

    try:
      # New buckets reject ACLs; uploads use public-read
      self.provider.allow_public_acls(bucket_name)
      self.provider.set_bucket_website(
        bucket_name,
        self.index_document,
        self.error_document,
      )
    except (ClientError, BotoCoreError) as e:
      raise ProvisionError(
        f"Failed to configure website hosting on '{bucket_name}': {e}"
      ) from e

    logger.debug(
      f"Website hosting enabled on '{bucket_name}' "
      f"(index={self.index_document}, error={self.error_document})"
    )
    return result.outcome
