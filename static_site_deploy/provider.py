"""Thin capability layer over the S3 and CloudFront clients.

The clients are created once per process and handed to every stage, so no
module holds global AWS state. Only bucket creation translates errors into a
result; every other call lets botocore errors propagate to the stage that
made it.
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .models import Distribution, InvalidationBatch, Outcome, ProviderResult

logger = logging.getLogger(__name__)

# Region without a LocationConstraint on CreateBucket
S3_DEFAULT_REGION = "us-east-1"


class AwsHostingProvider:
  """S3 bucket hosting and CloudFront operations used by a deploy."""

  def __init__(self, s3_client: Any, cloudfront_client: Any, region: str) -> None:
    self.s3 = s3_client
    self.cloudfront = cloudfront_client
    self.region = region

  @classmethod
  def from_region(cls, region: str, profile: str | None = None) -> "AwsHostingProvider":
    """Build both clients from one boto3 session."""
    session = boto3.Session(profile_name=profile, region_name=region)
    s3 = session.client("s3", region_name=region)
    # CloudFront is a global service; the session region is only a default
    cloudfront = session.client("cloudfront")
    return cls(s3, cloudfront, region)

  def create_bucket(self, name: str) -> ProviderResult:
    params: dict[str, Any] = {"Bucket": name}
    if self.region != S3_DEFAULT_REGION:
      params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

    try:
      self.s3.create_bucket(**params)
    except ClientError as e:
      error_code = e.response.get("Error", {}).get("Code")
      if error_code == "BucketAlreadyOwnedByYou":
        return ProviderResult(Outcome.ALREADY_EXISTS)
      return ProviderResult(Outcome.FATAL, reason=f"{error_code}: {e}")
    except BotoCoreError as e:
      return ProviderResult(Outcome.FATAL, reason=str(e))
    return ProviderResult(Outcome.OK)

  def allow_public_acls(self, name: str) -> None:
    """Lift Block Public Access and re-enable object ACLs on the bucket."""
    self.s3.put_public_access_block(
      Bucket=name,
      PublicAccessBlockConfiguration={
        "BlockPublicAcls": False,
        "IgnorePublicAcls": False,
        "BlockPublicPolicy": False,
        "RestrictPublicBuckets": False,
      },
    )
    self.s3.put_bucket_ownership_controls(
      Bucket=name,
      OwnershipControls={"Rules": [{"ObjectOwnership": "BucketOwnerPreferred"}]},
    )

  def set_bucket_website(self, name: str, index_document: str, error_document: str) -> None:
    self.s3.put_bucket_website(
      Bucket=name,
      WebsiteConfiguration={
        "IndexDocument": {"Suffix": index_document},
        "ErrorDocument": {"Key": error_document},
      },
    )

  def put_object(
    self,
    bucket: str,
    key: str,
    body: bytes,
    content_type: str,
    public_read: bool = True,
  ) -> None:
    params: dict[str, Any] = {
      "Bucket": bucket,
      "Key": key,
      "Body": body,
      "ContentType": content_type,
    }
    if public_read:
      params["ACL"] = "public-read"
    self.s3.put_object(**params)

  def list_distributions(self) -> list[Distribution]:
    distributions: list[Distribution] = []
    paginator = self.cloudfront.get_paginator("list_distributions")
    for page in paginator.paginate():
      for item in page.get("DistributionList", {}).get("Items", []):
        distributions.append(Distribution.from_summary(item))
    return distributions

  def create_distribution(self, config: dict[str, Any]) -> str:
    response = self.cloudfront.create_distribution(DistributionConfig=config)
    return str(response["Distribution"]["Id"])

  def create_invalidation(self, batch: InvalidationBatch) -> str:
    response = self.cloudfront.create_invalidation(
      DistributionId=batch.distribution_id,
      InvalidationBatch=batch.to_request(),
    )
    return str(response["Invalidation"]["Id"])

  def get_invalidation_status(self, distribution_id: str, invalidation_id: str) -> str:
    response = self.cloudfront.get_invalidation(
      DistributionId=distribution_id,
      Id=invalidation_id,
    )
    return str(response["Invalidation"]["Status"])

  def wait_for_invalidation(
    self,
    distribution_id: str,
    invalidation_id: str,
    delay: int = 20,
    max_attempts: int = 30,
  ) -> None:
    waiter = self.cloudfront.get_waiter("invalidation_completed")
    waiter.wait(
      DistributionId=distribution_id,
      Id=invalidation_id,
      WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
    )
