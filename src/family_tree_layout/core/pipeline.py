from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from family_tree_layout.analysis.generations import calculate_generations
from family_tree_layout.config import get_config
from family_tree_layout.core.context import LayoutContext
from family_tree_layout.core.exceptions import PipelineError, TreeLayoutError
from family_tree_layout.entities.models import Person, Relationship
from family_tree_layout.hierarchy.builder import BuildResult, build_hierarchy
from family_tree_layout.layout.config import LayoutConfig
from family_tree_layout.layout.engine import TreeLayout, calculate_layout
from family_tree_layout.layout.geometry import (
    BoundingBox,
    Connectors,
    bounding_box,
    canvas_size,
    connectors,
)
from family_tree_layout.layout.render import RenderNode, render_nodes
from family_tree_layout.logging import get_logger
from family_tree_layout.validation import validate_tree_structure

STATUS_OK = "ok"
STATUS_WARNING = "warning"
STATUS_ERROR = "error"


@dataclass
class TreeRender:
    """Everything a rendering layer needs for one snapshot."""

    build: BuildResult
    violations: List[str] = field(default_factory=list)
    layout: Optional[TreeLayout] = None
    nodes: List[RenderNode] = field(default_factory=list)
    bounds: Optional[BoundingBox] = None
    connectors: Connectors = field(default_factory=Connectors)
    canvas: Tuple[float, float] = (0, 0)
    generations: int = 0

    @property
    def status(self) -> str:
        """``error``: show "cannot build"; ``warning``: list violations; ``ok``: draw."""
        if self.build.error:
            return STATUS_ERROR
        if self.violations:
            return STATUS_WARNING
        return STATUS_OK


class Pipeline:
    """
    Orchestrates build -> validate -> layout -> flatten for one snapshot.
    No layout logic lives here.
    """

    def __init__(self, context: LayoutContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> TreeRender:
        ctx = self.ctx
        self.log.info(
            "Pipeline starting (members=%d, relationships=%d)",
            len(ctx.members),
            len(ctx.relationships),
        )

        try:
            build = build_hierarchy(ctx.members, ctx.relationships)
            render = TreeRender(build=build)
            ctx.stats["members"] = len(ctx.members)
            ctx.stats["relationships"] = len(ctx.relationships)

            if build.error:
                ctx.errors.append(build.error)
                self.log.warning("Cannot build tree: %s", build.error)
                return render

            render.violations = validate_tree_structure(build.root, ctx.members, ctx.relationships)
            render.layout = calculate_layout(build.root, ctx.layout_config, ctx.viewport_width)
            render.nodes = render_nodes(render.layout)
            render.bounds = bounding_box(render.layout)
            render.connectors = connectors(render.layout)
            render.canvas = canvas_size(render.layout)
            render.generations = calculate_generations(ctx.members, ctx.relationships)

            ctx.stats["nodes"] = len(render.nodes)
            ctx.stats["violations"] = len(render.violations)
            self.log.info("Pipeline completed (%s, nodes=%d)", render.status, len(render.nodes))
            return render

        except TreeLayoutError:
            self.log.exception("Pipeline execution failed")
            raise
        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise PipelineError(str(exc)) from exc


def run_pipeline(
    members: Sequence[Person],
    relationships: Sequence[Relationship],
    *,
    layout_config: Optional[LayoutConfig] = None,
    viewport_width: Optional[float] = None,
) -> TreeRender:
    """Convenience wrapper: build a context from the project config and run."""
    cfg = get_config()
    ctx = LayoutContext(
        config=cfg,
        logger=get_logger("pipeline"),
        members=list(members),
        relationships=list(relationships),
        layout_config=layout_config,
        viewport_width=viewport_width,
        debug=bool(cfg.debug),
    )
    return Pipeline(ctx).run()
