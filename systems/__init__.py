"""
Systems Package
Core ranking and match logic for RankedBot
"""
