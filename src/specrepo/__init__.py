"""specrepo - lint and manage repositories of JSON spec files."""

from specrepo.config import PACKAGE_VERSION as __version__

__all__ = ["__version__"]
