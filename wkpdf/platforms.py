"""Platform detection and the table of bundled wkhtmltopdf payloads."""

from __future__ import annotations

import sys
from enum import Enum
from importlib import resources
from typing import BinaryIO

BINARY_PREFIX = "wkhtmltopdf"
RESOURCE_PACKAGE = "wkpdf.bin"


class Platform(str, Enum):
    MAC = "mac"
    UNIX = "unix"
    WIN = "win"
    # No suffix; used when the OS string matches none of the above.
    DEFAULT = ""


def detect_platform(os_name: str | None = None) -> Platform:
    """Map an OS identifier (``sys.platform`` by default) to a payload variant.

    ``darwin`` contains ``win``, so the mac check must run first.
    """
    name = (sys.platform if os_name is None else os_name).lower()
    if "mac" in name or "darwin" in name:
        return Platform.MAC
    if "nix" in name or "nux" in name or "aix" in name:
        return Platform.UNIX
    if "win" in name:
        return Platform.WIN
    return Platform.DEFAULT


def resource_name(platform: Platform, prefix: str = BINARY_PREFIX) -> str:
    return prefix + platform.value


RESOURCE_NAMES: dict[Platform, str] = {p: resource_name(p) for p in Platform}


def open_packaged_resource(name: str, package: str = RESOURCE_PACKAGE) -> BinaryIO:
    """Open a bundled payload for reading. Raises FileNotFoundError if it is not shipped."""
    try:
        root = resources.files(package)
    except ModuleNotFoundError as e:
        raise FileNotFoundError(f"Resource package {package!r} is not installed") from e
    return root.joinpath(name).open("rb")
