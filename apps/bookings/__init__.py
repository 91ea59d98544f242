"""Bookings app package.

This app encapsulates the booking domain: the booking aggregate and its
status machine, the availability checker, the booking directory and the
lifecycle that requests, accepts, rejects and cancels bookings. Accepted
bookings never overlap on the same room; availability is re-checked
under a per-room lock when a request is accepted.
"""
