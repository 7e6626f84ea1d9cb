"""Application layer: ports (interfaces), DTOs, and the console services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (identity, registry, store, RPC).
"""
