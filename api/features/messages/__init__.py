"""Messages feature package: direct messages between two users.

Conversations are not stored. They are derived from the message log by the
projection in ``projection.py`` and enriched with user records for display.
"""
