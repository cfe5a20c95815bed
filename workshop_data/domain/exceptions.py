"""Domain-specific exceptions — framework-independent.

Remote failures are never raised across the facade; they travel as
``ErrorInfo`` values. These exceptions cover programming and configuration
errors only.
"""


class UnknownEntityTypeError(Exception):
    """Raised when an entity type key is not one of the cached collections."""

    def __init__(self, entity_type: object):
        self.entity_type = entity_type
        super().__init__(f"Unknown entity type '{entity_type}'")


class RemoteStoreConfigurationError(Exception):
    """Raised when the configured remote store cannot be built."""

    def __init__(self, backend: str, message: str):
        self.backend = backend
        self.message = message
        super().__init__(f"[{backend}] {message}")
