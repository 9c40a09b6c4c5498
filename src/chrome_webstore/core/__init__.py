"""Core of the client: configuration, domain, contracts and services.

Nothing here opens sockets; I/O lives in `chrome_webstore.adapters`.
"""
