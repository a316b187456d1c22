"""
Outcome resolution module.

Settles pending signals to WIN or LOSS with a single weighted random draw.
"""
