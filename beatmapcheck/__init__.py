"""
beatmapcheck
============

Checks Beat Saber map packages : Info.dat, the difficulty files it references
(in both the legacy v2 and the current v3 layout), the song audio and the
cover image. Problems are reported as a list of ConstraintViolation, each
pointing at the exact location it comes from.
"""

from .check import check_folder, check_package
from .context import ExtractedInfo
from .info.validate import validate_map_info
from .version import __version__
from .violations import Constraint, ConstraintViolation
