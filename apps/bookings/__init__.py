"""Bookings app package.

This app encapsulates the booking store: bookings owned by a user at a
hotel, the stay-length and future-date rules, and the best-effort owner
lookup dispatched after a booking is created.
"""
