"""Hotels app package.

Catalog of hotels and their rooms. The catalog is read by the booking
core (room lookup scoped to a hotel, nightly price) and receives one
write from it: the cached ``Room.is_available`` hint.
"""
