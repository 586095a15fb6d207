"""
Business logic layer.

Functions here take a database session, an optional cache and the request
locale explicitly, and raise StorefrontException subclasses on failure.
"""
