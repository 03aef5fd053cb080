"""Configuration loader for site deploys."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .exceptions import ConfigError

DEFAULT_REGION = "eu-central-1"
DEFAULT_INDEX_DOCUMENT = "index.html"
DEFAULT_ERROR_DOCUMENT = "error.html"
DEFAULT_CONCURRENCY = 8


@dataclass
class SiteConfig:
  """Configuration for deploying a single site.

  ``name`` is the bucket name and the CloudFront alias at the same time.
  """

  name: str
  folder: Path
  region: str = DEFAULT_REGION
  index_document: str = DEFAULT_INDEX_DOCUMENT
  error_document: str = DEFAULT_ERROR_DOCUMENT
  concurrency: int = DEFAULT_CONCURRENCY
  profile: str | None = None

  def __post_init__(self) -> None:
    self.folder = Path(self.folder)
    if self.concurrency < 1:
      raise ConfigError(f"concurrency must be at least 1 for {self.name}")


@dataclass
class DeployConfig:
  """Multi-site deploy configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "DeployConfig":
    """Load configuration from YAML file.

    Relative ``folder`` values are resolved against the file's directory.
    """
    path = Path(path)
    try:
      with open(path) as f:
        data = yaml.safe_load(f) or {}
    except OSError as e:
      raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
      raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
      raise ConfigError(f"Config file {path} must contain a mapping")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
      raise ConfigError(f"'defaults' in {path} must be a mapping")

    site_entries = data.get("sites") or []
    if not isinstance(site_entries, list):
      raise ConfigError(f"'sites' in {path} must be a list")

    sites: list[SiteConfig] = []

    for site_data in site_entries:
      if not isinstance(site_data, dict):
        raise ConfigError(f"Site entry in {path} must be a mapping, got {site_data!r}")

      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}

      for required in ("name", "folder"):
        if not merged.get(required):
          raise ConfigError(f"Site entry in {path} is missing '{required}'")

      folder = Path(merged["folder"])
      if not folder.is_absolute():
        folder = path.parent / folder

      try:
        concurrency = int(merged.get("concurrency", DEFAULT_CONCURRENCY))
      except (TypeError, ValueError) as e:
        raise ConfigError(
          f"concurrency for {merged['name']} must be an integer, got {merged['concurrency']!r}"
        ) from e

      sites.append(
        SiteConfig(
          name=merged["name"],
          folder=folder,
          region=merged.get("region", DEFAULT_REGION),
          index_document=merged.get("index_document", DEFAULT_INDEX_DOCUMENT),
          error_document=merged.get("error_document", DEFAULT_ERROR_DOCUMENT),
          concurrency=concurrency,
          profile=merged.get("profile"),
        )
      )

    return cls(sites=sites)

  def get(self, name: str) -> SiteConfig:
    """Return the site with the given name."""
    for site in self.sites:
      if site.name == name:
        return site
    raise ConfigError(f"Site '{name}' is not defined in the config file")
