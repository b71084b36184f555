"""
Use cases built on top of the state stores.

``defaults_persister`` holds the save/load/reset logic; ``session_service``
resolves which user's store a request should use.
"""
