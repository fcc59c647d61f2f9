"""
Version 1 of the API.

Mounted under ``/api`` (without a version segment) because existing
clients call ``/api/apps`` and ``/api/upload`` directly.  Breaking
changes should go into a new version subpackage mounted elsewhere.
"""
