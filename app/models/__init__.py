# Car rental bookings — domain models
# Booking is the only entity; it is persisted as JSON by app.store

from app.models.booking import Booking, STATUS_PENDING, STATUS_ACCEPTED   # noqa
