"""
HTTP surface of the relay.
"""
