"""Common application-wide constants."""

# PNRs are the hex encoding of this many random bytes
PNR_RANDOM_BYTES = 4

# How many fresh PNRs a booking attempt tries before giving up
PNR_MAX_ATTEMPTS = 5

# Used when a schedule is created without an explicit duration
MIN_SCHEDULE_DURATION_MINUTES = 60

DEFAULT_BUS_CAPACITY = 40

# Upper bound for seats in one booking and for the passengers search filter
MAX_SEATS_PER_REQUEST = 100

# Largest value an Integer column holds on every supported backend
MAX_INT_VALUE = 2_147_483_647

# Metadata for passenger-driven cancellations
PASSENGER_ACTOR = "passenger"


__all__ = [
    "PNR_RANDOM_BYTES",
    "PNR_MAX_ATTEMPTS",
    "MIN_SCHEDULE_DURATION_MINUTES",
    "DEFAULT_BUS_CAPACITY",
    "MAX_SEATS_PER_REQUEST",
    "MAX_INT_VALUE",
    "PASSENGER_ACTOR",
]
