class InventoryError(Exception):
    """Base class for every error raised by the inventory data layer."""


class InvalidIdentifier(InventoryError, ValueError):
    def __init__(self, uri, message=None):
        self.uri = uri
        super().__init__(message or f"Unknown URI {uri}")


class UnsupportedOperation(InventoryError):
    def __init__(self, operation: str, uri):
        self.operation = operation
        self.uri = uri
        super().__init__(f"{operation.capitalize()} is not supported for {uri}")


class InvalidArgument(InventoryError, ValueError):
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class StorageFault(InventoryError):
    pass
