"""
Utils Package
Utility functions and helpers for RankedBot
"""
