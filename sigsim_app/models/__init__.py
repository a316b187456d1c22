"""
Data models and contracts module.

Immutable indicator snapshots, signal records with a write-once result,
and the enumerations shared by the scorer and the resolver.
"""
