"""Exception hierarchy for closuregraph.

Every error is fatal for a run: the CLI logs it and exits non-zero. Nothing
in the pipeline retries.
"""


class ClosureGraphError(Exception):
    """Base class for all closuregraph errors."""
    pass


class ParseError(ClosureGraphError):
    """Tree text is malformed.

    Raised for lines without a branch marker, path tokens that are not
    absolute, or tree output without a root line.
    """
    pass


class CollaboratorError(ClosureGraphError):
    """An external store query failed.

    Raised when ``nix-store`` cannot be run, exits non-zero, or prints
    something that is not valid UTF-8 or not a byte count.
    """
    pass


class LookupAssertionError(ClosureGraphError, AssertionError):
    """Internal consistency violation.

    Raised for unknown arena positions and back-references to paths that
    were never created. Never expected for well-formed input.
    """
    pass
