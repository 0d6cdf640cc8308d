"""
Receipt Printer - template driven thermal receipt rendering
"""

__version__ = "1.0.0"
