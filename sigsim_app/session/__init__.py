"""
Session state module.

Signal history, running statistics and the activity feed for one
simulation session. Nothing here outlives the process.
"""
