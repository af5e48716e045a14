"""Capital Marketplace - investability scoring backend for startup fundraising"""

__version__ = "1.0.0"
