"""Domain layer: session models, errors, durations, and certificate rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
