__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'bindery'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .markers import *
from .shapes import *
from .hierarchy import *
from .defaults import *
from .binding import *
from .faults import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Markers (Value, Option) and annotation lookup
__all__ += markers.__all__  # type: ignore[attr-defined]
# Target shapes and typing helpers
__all__ += shapes.__all__  # type: ignore[attr-defined]
# Hierarchy flattening and specification extraction
__all__ += hierarchy.__all__  # type: ignore[attr-defined]
# Default value synthesis
__all__ += defaults.__all__  # type: ignore[attr-defined]
# Property setting
__all__ += binding.__all__  # type: ignore[attr-defined]
# Errors and warnings
__all__ += faults.__all__  # type: ignore[attr-defined]
