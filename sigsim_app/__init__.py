"""
SigSim - Synthetic Binary-Option Signal Engine

Scores synthetic technical-indicator snapshots into CALL/PUT signals with a
confidence and reasoning, and later resolves each signal to a WIN or LOSS
with a random draw weighted by the market state captured at scoring time.
"""

__version__ = "0.1.0"
__author__ = "SigSim Team"
