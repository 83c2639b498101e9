from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    ROLE_NOT_ALLOWED = "ROLE_NOT_ALLOWED"
    NOT_EVENT_ORGANIZER = "NOT_EVENT_ORGANIZER"

    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_NOT_PUBLISHED = "EVENT_NOT_PUBLISHED"
    EVENT_CANCELLED = "EVENT_CANCELLED"
    EVENT_FULL = "EVENT_FULL"
    EVENT_ALREADY_STARTED = "EVENT_ALREADY_STARTED"
    EVENT_STATUS_LOCKED = "EVENT_STATUS_LOCKED"
    CAPACITY_BELOW_BOOKINGS = "CAPACITY_BELOW_BOOKINGS"

    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BOOKING_ALREADY_EXISTS = "BOOKING_ALREADY_EXISTS"
    BOOKING_NOT_OWNER = "BOOKING_NOT_OWNER"
    BOOKING_CHECKED_IN = "BOOKING_CHECKED_IN"

    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
    APPLICATION_ALREADY_EXISTS = "APPLICATION_ALREADY_EXISTS"
    APPLICATION_ALREADY_DECIDED = "APPLICATION_ALREADY_DECIDED"
    INVALID_DECISION = "INVALID_DECISION"
