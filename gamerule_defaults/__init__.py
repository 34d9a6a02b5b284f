"""
gamerule-defaults
=================
Overrides the default values of a host's game rules through an external
config file and keeps a JSON Schema for that file in sync with the host's
current rule set.
"""

__version__ = "1.0.0"
