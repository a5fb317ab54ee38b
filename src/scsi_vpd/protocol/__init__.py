"""
SCSI VPD Protocol Package

Re-exports all protocol constants, types, page metadata and utilities.
"""

# Import all constants
from .constants import *  # noqa: F401,F403

# Import all enums and name tables
from .types import *  # noqa: F401,F403

# Import page metadata lookup
from .page_table import *  # noqa: F401,F403

# Import utility functions
from .utils import *  # noqa: F401,F403
