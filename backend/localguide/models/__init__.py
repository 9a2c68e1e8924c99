from localguide.models.listing import Experience, Tour
from localguide.models.availability import AvailabilitySlot, AvailabilityStatus

__all__ = [
    "AvailabilitySlot",
    "AvailabilityStatus",
    "Experience",
    "Tour",
]
