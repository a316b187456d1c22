"""
Signal scoring module.

Weighted additive scoring of indicator snapshots into directional signals,
and the high-conviction gate layered on top of the scorer output.
"""
