import re
from typing import List

from envsnap._src.exceptions import MalformedVersionError


_SEPARATOR = re.compile(r"[^0-9]+")


def parse_version(version: str) -> List[int]:
    """Split a version string into its numeric components.

    Any run of non-digit characters counts as a separator, so "1.2.3-4" and
    "1.2.3.4" parse the same. A trailing non-digit suffix is dropped, so
    "1.3.0+cpu" reads as [1, 3, 0]. This is not a PEP 440 parser.

    Raises
    ------
    MalformedVersionError
        If the string is empty, starts with a separator or holds no digits.
    """
    parts = _SEPARATOR.split(str(version).strip())
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()
    if any(part == "" for part in parts):
        raise MalformedVersionError(version)
    return [int(part) for part in parts]


def is_newer_compatible(installed: str, required: str) -> bool:
    """Is `installed` strictly newer than `required` under the same major version?

    A different major version is never compatible, in either direction.
    Otherwise the versions are compared left to right from the minor
    component on, considering only positions present in both, and the first
    difference decides. Equal versions are not newer.
    """
    installed_parts = parse_version(installed)
    required_parts = parse_version(required)

    if installed_parts[0] != required_parts[0]:
        return False

    for have, need in zip(installed_parts[1:], required_parts[1:]):
        if have != need:
            return have > need
    return False
