"""Database-level guard against overlapping active bookings.

On PostgreSQL adds an EXCLUDE USING GIST constraint so that two bookings
of the same room in an active status (pending, confirmed) can never
hold intersecting date ranges, even if application code is bypassed.
daterange(check_in, check_out, '[)') matches the half-open semantics of
the application check: check_out of one stay may equal check_in of the
next. Other databases rely on the application-level check alone.
"""

from django.db import migrations

CONSTRAINT_NAME = "booking_no_room_overlap"

EXTENSION_SQL = "CREATE EXTENSION IF NOT EXISTS btree_gist"

CREATE_SQL = f"""
ALTER TABLE bookings_booking
    ADD CONSTRAINT {CONSTRAINT_NAME}
    EXCLUDE USING gist (
        room_id WITH =,
        daterange(check_in, check_out, '[)') WITH &&
    )
    WHERE (status IN ('pending', 'confirmed'))
"""

DROP_SQL = f"ALTER TABLE bookings_booking DROP CONSTRAINT IF EXISTS {CONSTRAINT_NAME}"


def add_overlap_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute(EXTENSION_SQL)
    schema_editor.execute(CREATE_SQL)


def drop_overlap_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute(DROP_SQL)


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_overlap_constraint, drop_overlap_constraint),
    ]
