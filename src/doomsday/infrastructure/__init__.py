"""Infrastructure layer: session file I/O and the HTTP client.

This layer depends on stdlib, the domain layer, and third-party libs
(ruamel.yaml, httpx). It must never import from services, commands, or output.
"""
