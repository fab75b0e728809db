"""Bookings app package.

This app encapsulates the booking domain: the booking model, the
availability check that decides whether a room is free for a date range,
the command handlers that commit new bookings and move existing ones
through the status state machine, and the REST API on top of them.
Overlapping active bookings are prevented by per-room locks and row
locks, and on PostgreSQL by an exclusion constraint as well.
"""
