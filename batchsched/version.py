"""Build and runtime version information."""

from __future__ import annotations

import platform
import sys

VERSION = "Not provided."
GIT_SHA = "Not provided."
BUILT = "Not provided."


def info(api_version: str) -> list[str]:
    """Return human readable lines describing the versions in use."""
    return [
        f"API Version: {api_version}",
        f"Version: {VERSION}",
        f"Git SHA: {GIT_SHA}",
        f"Built At: {BUILT}",
        f"Python Version: {platform.python_version()}",
        f"Python OS/Arch: {sys.platform}/{platform.machine()}",
    ]


def print_version_and_exit(api_version: str) -> None:
    """Print the version lines and exit with status 0."""
    for line in info(api_version):
        print(line)
    raise SystemExit(0)