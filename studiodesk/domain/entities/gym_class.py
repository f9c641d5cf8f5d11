from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GymClass:
    id: str
    name: str
    type: str
    day_of_week: str  # "Monday" .. "Sunday"
    start_time: str  # HH:MM, studio local time
    duration_minutes: int
    capacity: int
    coach_id: str | None
    location: str
    # Cached count of bookings in ACTIVE_BOOKING_STATUSES, maintained by the entity store
    booked_count: int = 0

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"Class capacity must be a positive integer, got {self.capacity}")
        if self.duration_minutes <= 0:
            raise ValueError(f"Class duration must be positive, got {self.duration_minutes}")

    @property
    def spots_left(self) -> int:
        return max(0, self.capacity - self.booked_count)

    @property
    def is_full(self) -> bool:
        return self.booked_count >= self.capacity
