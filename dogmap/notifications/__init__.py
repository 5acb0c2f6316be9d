"""
Push notification relay.

Responsibilities:
- Build Firebase Cloud Messaging v1 messages for Android and iOS devices.
- Authenticate with a Firebase service account.
- Report delivery failures with the upstream HTTP status and reason.
"""
