"""
Service layer.

``AppService`` encapsulates the record lifecycle: validating uploads,
building records and shaping the read queries.  It talks to
persistence only through the injected ``AppStore``, so the HTTP
handlers stay unaware of which backend is in use.
"""
