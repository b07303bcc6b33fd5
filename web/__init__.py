"""
Web Package
Keep-alive HTTP endpoints served next to the bot
"""
