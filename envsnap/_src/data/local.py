import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from envsnap._src.constants import SNAPSHOT_COLUMNS
from envsnap._src.exceptions import SnapshotFormatError
from envsnap._src.models.snapshot import Snapshot
from envsnap._src.utils import ensure_dir


logger = logging.getLogger(__name__)


def dump_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to csv text with a package,version header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SNAPSHOT_COLUMNS)
    for entry in snapshot.entries:
        writer.writerow([entry.package, entry.version])
    return buffer.getvalue()


def parse_snapshot(lines: Iterable[str], source: str = "<string>") -> Snapshot:
    """Read a snapshot from csv lines.

    Columns other than package and version are ignored. Row order is kept
    as is, it is the install order.
    """
    reader = csv.DictReader(lines)
    missing = [col for col in SNAPSHOT_COLUMNS if col not in (reader.fieldnames or [])]
    if missing:
        raise SnapshotFormatError(f"snapshot {source} is missing column(s): {', '.join(missing)}")

    rows = []
    for row in reader:
        package = (row["package"] or "").strip()
        version = (row["version"] or "").strip()
        if not package:
            continue
        rows.append((package, version))

    try:
        return Snapshot.from_rows(rows)
    except ValidationError as e:
        raise SnapshotFormatError(f"invalid snapshot {source}: {e}") from e


def save_snapshot(path: str | Path, snapshot: Snapshot) -> Path:
    path = Path(path)
    ensure_dir(path.parent)
    path.write_text(dump_snapshot(snapshot))
    logger.info("Saved snapshot to %s", path)
    return path


def load_snapshot(path: str | Path) -> Snapshot:
    path = Path(path)
    if not path.exists():
        raise SnapshotFormatError(f"snapshot file '{path}' does not exist")
    with open(path, "r", newline="") as file:
        return parse_snapshot(file, source=str(path))
