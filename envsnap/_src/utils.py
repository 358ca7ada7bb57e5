from pathlib import Path


def ensure_dir(s: str | Path) -> None:
    """Recursively create a directory if it does not exist"""
    path = Path(s)
    path.mkdir(parents=True, exist_ok=True)


def get_project_root(directory: str | Path, root_path: Path = Path("pyproject.toml")) -> Path | None:
    """Identify the project root directory: the one that contains `root_path`.

    Parameters
    ----------
    directory : str | Path
        Directory which is a child of the root directory
    root_path : Path
        Path which identifies the root of the project. Usually this is
        "pyproject.toml" or ".git/"

    Returns
    -------
    Path | None
        Path to the project root, or None if a root cannot be found
    """
    directory = Path(directory).resolve()

    while True:
        if (directory / root_path.name).exists():
            return directory
        if directory.parent == directory:
            return None
        directory = directory.parent


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f} secs"
    if seconds < 3600:
        return f"{seconds / 60:.1f} mins"
    return f"{seconds / 3600:.1f} hours"
