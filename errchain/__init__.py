"""
errchain - call-stack provenance for errors.

Annotate an error where it originates, wrap it with a cause wherever it is
passed on, and render one merged, non-repeating trace at the end.

Example:
    >>> from errchain import annotate, wrap, render
    >>>
    >>> def find_product():
    ...     return annotate(LookupError("product not found"))
    >>>
    >>> def checkout():
    ...     return wrap(find_product(), "product-123")
    >>>
    >>> print(render(checkout()))
"""

from errchain.capture import MAX_DEPTH, CallSite, capture
from errchain.chain import find, iter_chain, unwrap
from errchain.config import TraceConfig
from errchain.details import ErrorDetails, details, details_as, with_details
from errchain.errors import TraceInvariantError
from errchain.frames import Frame, format_frame
from errchain.node import ErrorTrace, Exposure, annotate, wrap
from errchain.render import TraceFrame, frames, render, to_dict
from errchain.resolve import ResolvedTrace, resolve

__version__ = "0.1.0"

__all__ = [
    "MAX_DEPTH",
    "CallSite",
    "ErrorDetails",
    "ErrorTrace",
    "Exposure",
    "Frame",
    "ResolvedTrace",
    "TraceConfig",
    "TraceFrame",
    "TraceInvariantError",
    "annotate",
    "capture",
    "details",
    "details_as",
    "find",
    "format_frame",
    "frames",
    "iter_chain",
    "render",
    "resolve",
    "to_dict",
    "unwrap",
    "with_details",
    "wrap",
]
