"""Upload a local folder to the site bucket."""

import logging
import mimetypes
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from .config import DEFAULT_CONCURRENCY
from .exceptions import UploadError
from .models import UploadedFile, as_key
from .provider import AwsHostingProvider

logger = logging.getLogger(__name__)

FALLBACK_CONTENT_TYPE = "application/octet-stream"


def list_files(root: Path | str) -> list[str]:
  """Return every file under root, recursively, as POSIX relative paths."""
  root = Path(root)
  if not root.is_dir():
    raise UploadError(f"Upload folder {root} does not exist or is not a directory")
  return [path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()]


def guess_content_type(path: str) -> str:
  content_type, _ = mimetypes.guess_type(path)
  return content_type or FALLBACK_CONTENT_TYPE


class ObjectUploader:
  """Upload files from one local folder with a bounded number of workers."""

  def __init__(
    self,
    provider: AwsHostingProvider,
    root: Path | str,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
  ) -> None:
    self.provider = provider
    self.root = Path(root)
    self.concurrency = concurrency

  def upload(self, bucket_name: str, relative_path: str) -> UploadedFile:
    """Upload one file under its relative path with public-read access."""
    key = as_key(relative_path)
    content_type = guess_content_type(relative_path)
    try:
      body = (self.root / relative_path).read_bytes()
      self.provider.put_object(bucket_name, key, body, content_type, public_read=True)
    except (OSError, ClientError, BotoCoreError) as e:
      logger.error(f"Error while uploading {key}")
      raise UploadError(f"Failed to upload {key} to '{bucket_name}': {e}") from e

    logger.info(f"{key} file uploaded")
    return UploadedFile(relative_path=relative_path, content_type=content_type)

  def upload_folder(self, bucket_name: str) -> list[UploadedFile]:
    """Upload every file under the root folder.

    Waits for all uploads. On the first failure, pending uploads are
    cancelled, running ones are allowed to finish, and the error is raised.
    """
    files = list_files(self.root)
    if not files:
      logger.info(f"No files found in {self.root}")
      return []

    logger.debug(f"Uploading {len(files)} files with {self.concurrency} workers")
    uploaded: list[UploadedFile] = []
    with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
      futures = {pool.submit(self.upload, bucket_name, path): path for path in files}
      try:
        for future in as_completed(futures):
          uploaded.append(future.result())
      except BaseException:
        for future in futures:
          future.cancel()
        raise

    return uploaded
