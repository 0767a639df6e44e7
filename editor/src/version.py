"""Application version.

Frozen builds bake the version in; installed copies read the package
metadata; a plain source checkout falls back to the VERSION file at the
project root.
"""

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = 'collage-editor'

# Overwritten by the build script for frozen builds
_BAKED_VERSION = None


def get_version() -> str:
    """Application version string, e.g. '1.0.0'"""
    if _BAKED_VERSION is not None:
        return _BAKED_VERSION
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _source_version()


def _source_version() -> str:
    # editor/src/version.py -> project root
    version_file = Path(__file__).resolve().parent.parent.parent / "VERSION"
    try:
        return version_file.read_text().strip()
    except FileNotFoundError:
        return "0.0.0"
