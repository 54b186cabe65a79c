"""Authentication.

Users authenticate with email/password and receive a signed JWT
session token valid for 7 days. Protected routes resolve the token
to an Identity through the get_current_user dependency.
"""
