"""
Pydantic schema definitions for API payloads.

Schemas are separated from the store implementations to decouple the
API representation from persistence.  Python attributes are
snake_case; the JSON wire format uses the camelCase aliases clients
already depend on (``githubLink``, ``apkFile``, ``storagePath``,
``uploadDate``).
"""
