"""Build metadata for gbgen.

The version banner embedded in generated files comes from here. It is
resolved once at process start (see ``gbgen.cli``) and then passed to the
renderer explicitly; rendering code never reads this module on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import metadata

from gbgen import __version__
from gbgen.config.env import EnvReader

logger = logging.getLogger(__name__)

DIST_NAME = "gbgen"
DEV_VERSION = "dev"


@dataclass(frozen=True)
class BuildInfo:
    """Version and optional commit of the running gbgen."""

    version: str = DEV_VERSION
    commit: str = ""

    def describe(self) -> str:
        """Return the ``gbgen <version> (<commit>)`` line used by ``gbgen version``."""
        if self.commit:
            return f"gbgen {self.version} ({self.commit})"
        return f"gbgen {self.version}"


def resolve_build_info(reader: EnvReader | None = None) -> BuildInfo:
    """Resolve build metadata from the installed distribution.

    Args:
        reader: Environment reader, used for GBGEN_BUILD_COMMIT.

    Returns:
        BuildInfo with the installed version, or the source tree's
        __version__ when gbgen runs without being installed.
    """
    reader = reader or EnvReader()
    try:
        version = metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        logger.debug("Distribution %s not installed, using %s", DIST_NAME, __version__)
        version = __version__
    commit = reader.get_str("GBGEN_BUILD_COMMIT", "") or ""
    return BuildInfo(version=version, commit=commit.strip())
