"""Users app package.

Defines the custom user model with its booking role (regular user or
administrator) and the authentication endpoints. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
