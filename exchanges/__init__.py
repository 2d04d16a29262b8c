"""
Centralized exchange integrations.

Submodules encapsulate individual venues; ``base_client`` holds the shared
credential container and client protocol.
"""
