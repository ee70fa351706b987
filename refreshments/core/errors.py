"""
Error taxonomy for the refreshments counter.

Every user action either succeeds or raises one of these; the HTTP layer
turns them into a single notification payload.
"""


class RefreshmentsError(Exception):
    """Base error for counter operations"""

    kind = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RefreshmentsError):
    """Raised when an item name or price is not acceptable"""

    kind = "validation_error"


class NotFoundError(RefreshmentsError):
    """Raised when an item id is unknown (or was deleted)"""

    kind = "not_found"

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class EmptyCartError(RefreshmentsError):
    """Raised when checking out with nothing in the cart"""

    kind = "empty_cart"

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class StateError(RefreshmentsError):
    """Raised when an action is not allowed in the current screen state"""

    kind = "invalid_state"


class PersistenceError(RefreshmentsError):
    """Raised when the backing store call fails"""

    kind = "persistence_error"
