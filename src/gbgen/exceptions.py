"""Root exception for gbgen.

Every error the tool raises on purpose derives from GBGenError so the CLI
can tell expected failures apart from bugs.
"""


class GBGenError(Exception):
    """Base class for all gbgen errors."""
