"""Error taxonomy shared by the services and the HTTP layer."""


class MarketplaceError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = 400
    code: str = "marketplace_error"

    def __init__(self, message: str, **context: object):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, str]:
        """Render the error as a response body."""
        return {"error": self.code, "message": self.message}


class ValidationError(MarketplaceError):
    """Order payload is missing required data."""

    code = "validation_error"


class MinimumOrderNotMet(ValidationError):
    """Subtotal is below the restaurant's minimum order."""

    code = "minimum_order_not_met"


class InvalidTransition(MarketplaceError):
    """Requested status change is not allowed from the current status."""

    code = "invalid_transition"


class InvalidState(MarketplaceError):
    """Order is not in a state that allows the requested action."""

    code = "invalid_state"


class DriverBusy(InvalidState):
    """Driver already holds an active delivery."""

    code = "driver_busy"


class AlreadyAssigned(MarketplaceError):
    """Order has already been claimed by a driver."""

    code = "already_assigned"


class Forbidden(MarketplaceError):
    """Caller does not own the resource it is acting on."""

    status_code = 403
    code = "forbidden"


class NotFound(MarketplaceError):
    """Referenced record does not exist."""

    status_code = 404
    code = "not_found"


class ConcurrentUpdate(MarketplaceError):
    """Record kept changing underneath an optimistic transaction."""

    status_code = 409
    code = "concurrent_update"
