"""Routing — immutable locations and the claim protocol.

Router nodes claim leading path segments as ownership is delegated down
the tree; what they leave unclaimed is handed to their descendants.
"""
