"""
Domain layer package.

Contains entities, errors and port interfaces.
No framework imports, no IO, no side effects.
"""
