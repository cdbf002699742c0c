"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that storage and request errors
are consistently translated into API responses.
"""
