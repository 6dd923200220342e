"""
Courier booking engine: service catalog, booking draft, step sequencing,
price estimation and submission for the delivery booking wizard.
"""

__version__ = "1.0.0"
