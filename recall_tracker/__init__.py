"""
Recall Tracker - a client for browsing, searching and saving CPSC product recalls.
"""

__version__ = "0.1.0"
