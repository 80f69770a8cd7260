"""Artifact fetcher for the proxy binary and its configuration."""

import logging
import urllib.error
import urllib.request
from pathlib import Path

from ..exceptions import FetchError
from ..utils.constants import FETCH_USER_AGENT

logger = logging.getLogger(__name__)


class ArtifactFetcher:
    """Retrieves artifacts from the remote source.

    Any URL scheme urllib understands works, including file:// for
    offline installs. No retries and no timeout: a fetch either completes
    or fails.
    """

    def __init__(self, base_url: str):
        """Initialize the fetcher.

        Args:
            base_url: URL prefix the artifact names are appended to
        """
        self.base_url = base_url.rstrip("/")

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def fetch(self, url: str) -> bytes:
        """Download one artifact.

        Args:
            url: Full remote location

        Returns:
            The artifact content

        Raises:
            FetchError: On network, HTTP or empty-body failure
        """
        logger.debug(f"Fetching {url}")
        request = urllib.request.Request(url, headers={"User-Agent": FETCH_USER_AGENT})
        try:
            with urllib.request.urlopen(request) as response:
                data = response.read()
        except urllib.error.HTTPError as e:
            raise FetchError(f"Download of {url} failed: HTTP {e.code} {e.reason}", url=url) from e
        except urllib.error.URLError as e:
            raise FetchError(f"Download of {url} failed: {e.reason}", url=url) from e
        except (OSError, ValueError) as e:
            raise FetchError(f"Download of {url} failed: {e}", url=url) from e

        if not data:
            raise FetchError(f"Download of {url} returned no data", url=url)

        logger.debug(f"Fetched {len(data)} bytes from {url}")
        return data

    def fetch_to(self, name: str, staging_dir: Path) -> Path:
        """Download `<base_url>/<name>` into the staging directory.

        Args:
            name: Artifact file name
            staging_dir: Directory to write the artifact into

        Returns:
            Path of the staged file
        """
        data = self.fetch(self.url_for(name))
        staged = staging_dir / name
        try:
            staged.write_bytes(data)
        except OSError as e:
            raise FetchError(f"Could not stage {name} in {staging_dir}: {e}") from e
        return staged
