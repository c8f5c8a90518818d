from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..providers.base import Location


@dataclass
class ResolutionContext:
    explicit: Optional[Location] = None

    location: Optional[Location] = None
    resolved_by: Optional[str] = None

    # Names of steps that reached out to a device or network collaborator.
    attempted: List[str] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)
