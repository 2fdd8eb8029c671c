from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from family_tree_layout.entities.models import Person, Relationship


@dataclass
class LayoutContext:
    """
    Shared pipeline context.
    Holds one member/relationship snapshot plus the knobs for laying it out.
    """

    config: Any
    logger: Any

    members: List[Person] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    layout_config: Optional[Any] = None
    viewport_width: Optional[float] = None

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: list = field(default_factory=list)

    debug: bool = False
