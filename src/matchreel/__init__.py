"""matchreel core package.

The package is organized into focused modules:

- **matcher**: The fixture-to-clip matching engine (queries, validation, classification, resolution)
- **search**: Paced HTTP client and payload models for the media search API
- **schedule**: Schedule loading and the per-run eligibility gate
- **teams**: Team keyword and derby override loading
- **persistence**: JSON link store
- **crawler**: Run orchestration tying the above together
- **cli**: Command line entry point

The main entry point for a search run is the ``Crawler`` class.
"""

from .crawler import Crawler
from .version import __version__

__all__ = [
    "__version__",
    "Crawler",
]
