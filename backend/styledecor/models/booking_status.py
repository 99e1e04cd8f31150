import enum


class BookingStatus(str, enum.Enum):
    """Central booking status enumeration used across the application."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DecoratorStatus(str, enum.Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    ASSIGNED = "assigned"


# Every edge a booking may take. Settlement creates bookings directly in
# PENDING, so there is no entry for "no status yet".
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.ASSIGNED, BookingStatus.CANCELLED}),
    BookingStatus.ASSIGNED: frozenset({BookingStatus.ONGOING, BookingStatus.CANCELLED}),
    BookingStatus.ONGOING: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def sources_for(target: BookingStatus) -> list[BookingStatus]:
    """Statuses from which ``target`` is reachable, in declaration order."""
    return [src for src in BookingStatus if target in ALLOWED_TRANSITIONS[src]]
