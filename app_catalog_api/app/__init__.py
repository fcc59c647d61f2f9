"""
Application package initializer.

This package contains the main entrypoint for the catalog API and all
of its submodules.  The code is split into a few logical pieces:

* ``core`` holds configuration, logging, the error taxonomy and the
  document store implementations.
* ``schemas`` defines the pydantic models exchanged over HTTP.
* ``services`` contains the record lifecycle and query logic.
* ``api`` exposes the HTTP routes.

The ASGI application itself lives in ``app.main``; import it from
there (``app_catalog_api.app.main:app``).
"""
