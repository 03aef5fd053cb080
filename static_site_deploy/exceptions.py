"""Exceptions raised by the deploy stages."""


class DeployError(RuntimeError):
  """Base class for deploy failures."""


class ConfigError(DeployError):
  """Raised when the sites file is missing required values."""


class ProvisionError(DeployError):
  """Raised when the bucket cannot be created or configured for hosting."""


class UploadError(DeployError):
  """Raised when a file cannot be read or written to the bucket."""


class ResolutionError(DeployError):
  """Raised when distributions cannot be listed or created."""


class InvalidationError(DeployError):
  """Raised when an invalidation request is rejected.

  Uploaded files are already live when this happens; nothing is rolled back.
  """
