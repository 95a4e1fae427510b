"""Exception types raised by the Ember Docs MCP Server."""


class EmberMCPError(Exception):
    """Base class for all server errors."""


class CorpusLoadError(EmberMCPError):
    """Raised when the documentation corpus cannot be fetched.

    A failed load leaves the previously loaded index (if any) in place; the
    caller may retry by loading again.
    """


class DimensionMismatchError(EmberMCPError, ValueError):
    """Raised when comparing embedding vectors of different lengths."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Embeddings must have the same length ({left} != {right})")
        self.left = left
        self.right = right


class RegistryError(EmberMCPError):
    """Raised when the npm registry returns an unexpected response."""


class PackageNotFoundError(RegistryError):
    """Raised when a package does not exist on the npm registry."""

    def __init__(self, package_name: str):
        super().__init__(f'Package "{package_name}" not found on npm registry')
        self.package_name = package_name
