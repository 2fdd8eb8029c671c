"""
family_tree_layout

Builds a rooted family tree from flat member/relationship records, validates
it against the Phase 1 rules, lays it out for rendering and keeps the
zoom/pan state of the surface it is drawn on.

Typical use from a presentation layer:

    from family_tree_layout.loader import load_members, load_relationships
    from family_tree_layout.core.pipeline import run_pipeline

    render = run_pipeline(load_members(raw_members), load_relationships(raw_rels))
"""

__version__ = "0.1.0"
