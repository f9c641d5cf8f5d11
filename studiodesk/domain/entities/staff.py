from dataclasses import dataclass


@dataclass(frozen=True)
class Staff:
    id: str
    name: str
    role: str  # "front-desk" | "coach" | "head-coach" | "instructor" | "manager" | "owner"
    location: str
    email: str | None = None
