"""
Exception hierarchy for treeviz.

User mistakes (duplicate keys, missing values, empty heap) are never
raised: they are narrated as toasts.  Everything below signals a bug or
an environment problem.
"""


class TreeVizError(Exception):
    """Base class for all treeviz errors."""


class InvariantViolation(TreeVizError):
    """
    A parent/child link was made or broken inconsistently.

    Raised by the link/unlink primitives the moment a structural
    invariant would be violated.  Continuing after this would produce
    silently wrong animations, so nothing in treeviz catches it.
    """


class ExportError(TreeVizError):
    """Writing a PDF / GIF / MP4 walkthrough failed."""
