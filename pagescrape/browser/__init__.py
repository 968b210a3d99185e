"""
Rendering engine adapter
"""

from .session import BrowserSession

__all__ = ['BrowserSession']
