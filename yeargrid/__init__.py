"""yeargrid: year-view calendar layout and drag/resize core.

Public API:
  - import from `yeargrid.api` (preferred) or `import yeargrid` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
