"""
Synthetic market module.

Random indicator snapshots and ambient market conditions standing in for a
real price feed.
"""
