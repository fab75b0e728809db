"""Users app package.

This module defines the custom user model used as AUTH_USER_MODEL
(``apps.users.models.CustomUser``) and the JWT authentication endpoints.
Users carry a ``role`` of either ``user`` or ``admin``; the booking core
receives it through an explicit actor context.
"""
