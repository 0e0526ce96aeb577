"""Domain entities.

Plain data structures used by the core. Keep filesystem I/O in adapters.
"""

from .classes import *
from .index import *
