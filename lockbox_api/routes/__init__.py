"""
Routes Package

HTTP routes for the lockbox API.
"""

from . import lockbox_status, totp

__all__ = ['lockbox_status', 'totp']
