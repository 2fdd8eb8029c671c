class TreeLayoutError(Exception):
    """Base exception for family tree layout failures."""


class IngestionError(TreeLayoutError):
    """Raised when a member or relationship record is malformed."""


class CycleDetectedError(TreeLayoutError):
    """Raised when a parent/child chain loops back onto an ancestor."""


class LayoutConfigError(TreeLayoutError):
    """Raised when layout or viewport parameters are unusable."""


class PipelineError(TreeLayoutError):
    """Raised when the build/layout pipeline fails unexpectedly."""
