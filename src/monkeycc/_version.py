"""Installed version of monkeycc."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "monkeycc"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """Version of the installed ``monkeycc`` distribution.

    Running from a source checkout that was never installed reports
    ``UNKNOWN_VERSION``.
    """
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
