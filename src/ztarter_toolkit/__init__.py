"""Top-level package for lev-ztarter.

Provides subpackages:
- ztarter_toolkit.core – identifiers, polygons, level geometry and errors
- ztarter_toolkit.extractor – polygon extraction and directory ingestion
- ztarter_toolkit.store – deduplicated polygon store, merge and persistence
- ztarter_toolkit.builder – level assembly, output and batch generation
- ztarter_toolkit.cli – command-line entry point
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lev-ztarter")
except PackageNotFoundError:
    # Source checkout that was never installed
    __version__ = "0.0.0"

__all__: list[str] = ["__version__"]
