"""Users feature package: user records, lookup service and identity resolution.

Users are created and managed outside this application; this package only
reads them.
"""
