"""
Utility modules for the Puppet documentation extractor.
"""

from pupdoc.utils.logging import (
    get_logger,
    setup_logging,
    log_parse_failure,
    log_skipped_file,
)
from pupdoc.utils.version import versioncmp

__all__ = [
    "get_logger",
    "setup_logging",
    "log_parse_failure",
    "log_skipped_file",
    "versioncmp",
]
