"""
Lockbox API

Access code generation and heartbeat tracking for remote lockboxes.
"""

__version__ = "1.0.0"
