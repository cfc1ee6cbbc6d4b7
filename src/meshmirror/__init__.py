"""
meshmirror: EndpointSlice reflection for hub-and-shortcut cluster topologies.
"""

__version__ = "0.1.0"
