"""Errors raised by the Slack directory client."""


class DirectoryError(Exception):
    """Base exception for directory errors."""

    pass


class MissingInputError(DirectoryError):
    """Neither an id nor a name was supplied for a target."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Either {target}_id or {target}_name must be provided")


class AmbiguousInputError(DirectoryError):
    """Both an id and a name were supplied for the same target."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Provide only one of {target}_id or {target}_name, not both")


class UnresolvedNameError(DirectoryError):
    """A name (or id, for inverse lookups) matched nothing in the directory."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"No {kind} found for '{name}'")


class TransportError(DirectoryError):
    """The call never produced a Slack response (connection failure, timeout)."""

    def __init__(self, method: str, original_error: Exception):
        self.method = method
        self.original_error = original_error
        super().__init__(f"{method} failed: {original_error}")


class RemoteRejectedError(DirectoryError):
    """Slack answered with ok=false."""

    def __init__(self, method: str, error: str):
        self.method = method
        self.error = error
        super().__init__(f"{method} rejected: {error}")
