"""
Shared infrastructure: exceptions, logging, paths, configuration, snapshots.
"""
