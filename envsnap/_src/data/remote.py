import logging

import requests

from envsnap._src.constants import (
    DEFAULT_REMOTE_BRANCH,
    DEFAULT_REMOTE_HOST,
    DEFAULT_SNAPSHOT_FILENAME,
)
from envsnap._src.data.local import parse_snapshot
from envsnap._src.exceptions import SnapshotLoadError
from envsnap._src.models.snapshot import Snapshot


logger = logging.getLogger(__name__)


def remote_snapshot_url(
    slug: str,
    path_in_repo: str = DEFAULT_SNAPSHOT_FILENAME,
    branch: str = DEFAULT_REMOTE_BRANCH,
    host: str = DEFAULT_REMOTE_HOST,
) -> str:
    """Build the raw file url of a snapshot stored in a repository.

    `slug` is owner/repo optionally followed by a sub directory, eg.
    'OHDSI/StudyProtocols/AlendronateVsRaloxifene'. The branch goes right
    after owner/repo.
    """
    parts = [part for part in slug.strip("/").split("/") if part]
    if len(parts) < 2:
        raise SnapshotLoadError(f"'{slug}' is not of the form owner/repo[/subpath]")
    segments = [host.rstrip("/"), *parts[:2], branch, *parts[2:], path_in_repo.strip("/")]
    return "/".join(segments)


def load_remote_snapshot(
    slug: str,
    path_in_repo: str = DEFAULT_SNAPSHOT_FILENAME,
    branch: str = DEFAULT_REMOTE_BRANCH,
    host: str = DEFAULT_REMOTE_HOST,
    timeout: float = 30,
) -> Snapshot:
    url = remote_snapshot_url(slug, path_in_repo, branch=branch, host=host)
    logger.info("Fetching snapshot from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SnapshotLoadError(f"could not fetch snapshot from {url}: {e}") from e
    return parse_snapshot(response.text.splitlines(), source=url)
