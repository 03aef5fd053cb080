"""Value types passed between the deploy stages."""

import time
import uuid
from urllib.parse import quote
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


def caller_reference() -> str:
  """Unique CloudFront idempotency token: millisecond timestamp plus a random suffix."""
  return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:8]}"


def as_key(relative_path: str) -> str:
  """Prefix a relative path with a single leading slash."""
  return "/" + relative_path.lstrip("/")


class Outcome(Enum):
  """Result of a provider call where an existing resource is not an error."""

  OK = "ok"
  ALREADY_EXISTS = "already_exists"
  FATAL = "fatal"


@dataclass(frozen=True)
class ProviderResult:
  outcome: Outcome
  reason: str | None = None

  @property
  def succeeded(self) -> bool:
    return self.outcome is not Outcome.FATAL


@dataclass(frozen=True)
class DeployRequest:
  """One deploy invocation: a site name and the folder to publish."""

  site_name: str
  upload_folder: Path

  def __post_init__(self) -> None:
    if not self.site_name:
      raise ValueError("site_name must not be empty")
    object.__setattr__(self, "upload_folder", Path(self.upload_folder))


@dataclass(frozen=True)
class UploadedFile:
  relative_path: str
  content_type: str

  @property
  def key(self) -> str:
    return as_key(self.relative_path)


@dataclass(frozen=True)
class Distribution:
  """A CloudFront distribution as returned by the listing call."""

  id: str
  aliases: frozenset[str] = frozenset()
  domain_name: str = ""

  @classmethod
  def from_summary(cls, summary: dict[str, Any]) -> "Distribution":
    aliases = summary.get("Aliases", {}).get("Items", [])
    return cls(
      id=summary["Id"],
      aliases=frozenset(aliases),
      domain_name=summary.get("DomainName", ""),
    )


@dataclass(frozen=True)
class InvalidationBatch:
  distribution_id: str
  paths: tuple[str, ...]
  caller_reference: str = field(default_factory=caller_reference)

  def to_request(self) -> dict[str, Any]:
    """Build the InvalidationBatch payload for CreateInvalidation.

    Paths are percent-encoded; CloudFront rejects unsafe characters.
    """
    items = [quote(as_key(path), safe="/~") for path in self.paths]
    return {
      "CallerReference": self.caller_reference,
      "Paths": {
        "Quantity": len(items),
        "Items": items,
      },
    }
