class PartnerHubError(Exception):
    """Base class for errors raised by the commission engine and its services"""


class InvalidRateError(PartnerHubError, ValueError):
    """Raised when a commission rate or share falls outside [0, 1]"""

    def __init__(self, rate, field='rate'):
        self.rate = rate
        self.field = field
        super().__init__(f"{field} must be between 0 and 1 (0% to 100%), got {rate!r}")


class InvalidTransitionError(PartnerHubError, ValueError):
    """Raised when a commission status change is not allowed"""

    def __init__(self, current_status, new_status):
        self.current_status = current_status
        self.new_status = new_status
        super().__init__(f"Cannot change commission status from '{current_status}' to '{new_status}'")


class StoreError(PartnerHubError):
    """Raised when the database rejects a read or write"""


class EmailDeliveryError(PartnerHubError):
    """Raised when the transactional email provider does not accept a message"""


class NotFoundError(PartnerHubError, LookupError):
    """Raised when a requested record does not exist"""
