"""compactl - add and remove cluster components driven by configuration changes."""

__version__ = "0.1.0"
