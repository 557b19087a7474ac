from collections import namedtuple

from . import faults, options, parser, values
from .faults import *
from .options import *
from .parser import *
from .values import *

__title__ = 'argline'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

VersionInfo = namedtuple("VersionInfo", "major minor micro releaselevel serial metadata")

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    *faults.__all__,
    *options.__all__,
    *parser.__all__,
    *values.__all__,
)
