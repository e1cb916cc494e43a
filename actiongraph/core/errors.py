"""
Errors raised by action graph queries.
"""


class ActionGraphError(ValueError):
    """Base class for failed action graph queries."""


class PackageNotFoundError(ActionGraphError):
    """No build step exists for the requested package."""

    def __init__(self, package: str):
        super().__init__(f"could not find package {package!r}")
        self.package = package


class NoRootError(ActionGraphError):
    """The trace has no build step to start a graph search from."""

    def __init__(self):
        super().__init__("no first build step")


class TraceFormatError(ActionGraphError):
    """The input could not be decoded into a sequence of build steps."""


class TemplateError(ActionGraphError):
    """An output template refers to a field rows do not have."""
