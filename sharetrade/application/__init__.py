"""
Application layer package.

Contains the workflows that orchestrate domain logic.
This layer depends on domain ports, never on infrastructure.
"""
