"""
Application layer package.

Contains services that orchestrate domain ports.
This layer depends on domain ports, never on infrastructure.
"""
