"""Command line entry point.

Usage:
    static-site-deploy <site-name> <folder> [--region eu-central-1]
    static-site-deploy --config sites.yaml [<site-name>]
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from botocore.exceptions import BotoCoreError

from .config import DEFAULT_CONCURRENCY, DEFAULT_REGION, DeployConfig, SiteConfig
from .deployer import StaticSiteDeployer, run_deploy
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
    prog="static-site-deploy",
    description="Upload a static site to S3 and invalidate its CloudFront cache.",
  )
  parser.add_argument("site", nargs="?", help="Bucket name, also used as the CloudFront alias")
  parser.add_argument("folder", nargs="?", type=Path, help="Local folder to upload")
  parser.add_argument("--config", type=Path, help="YAML file with site definitions")
  parser.add_argument("--region", help=f"S3 region (default: {DEFAULT_REGION})")
  parser.add_argument("--profile", help="AWS profile name")
  parser.add_argument("--concurrency", type=int, help=f"Parallel uploads (default: {DEFAULT_CONCURRENCY})")
  parser.add_argument("--verbose", "-v", action="store_true", help="Debug output")
  return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
  logging.basicConfig(
    level=logging.DEBUG if verbose else logging.INFO,
    format="%(message)s",
    stream=sys.stdout,
  )
  for noisy in ("boto3", "botocore", "urllib3", "s3transfer"):
    logging.getLogger(noisy).setLevel(logging.WARNING)


def apply_overrides(site: SiteConfig, args: argparse.Namespace) -> SiteConfig:
  """Let command line flags win over values from the config file."""
  if args.folder:
    site.folder = args.folder
  if args.region:
    site.region = args.region
  if args.profile:
    site.profile = args.profile
  if args.concurrency is not None:
    if args.concurrency < 1:
      raise ConfigError("--concurrency must be at least 1")
    site.concurrency = args.concurrency
  return site


def resolve_sites(args: argparse.Namespace) -> list[SiteConfig]:
  if args.config:
    config = DeployConfig.from_yaml(args.config)
    sites = [config.get(args.site)] if args.site else list(config.sites)
    if not sites:
      raise ConfigError(f"No sites defined in {args.config}")
  else:
    if not args.site or not args.folder:
      raise ConfigError("A site name and a folder are required without --config")
    sites = [SiteConfig(name=args.site, folder=args.folder)]
  return [apply_overrides(site, args) for site in sites]


def main(argv: Sequence[str] | None = None) -> int:
  """Deploy each selected site in order, stopping at the first failure."""
  args = parse_args(argv)
  configure_logging(args.verbose)

  try:
    sites = resolve_sites(args)
  except ConfigError as e:
    logger.error(str(e))
    return 1

  for site in sites:
    logger.info(f"Deploying {site.folder} to {site.name} ({site.region})")
    try:
      deployer = StaticSiteDeployer.from_site_config(site)
    except BotoCoreError as e:
      logger.error(f"Cannot set up AWS clients for {site.name}: {e}")
      return 1
    status = run_deploy(deployer)
    if status != 0:
      return status
  return 0
