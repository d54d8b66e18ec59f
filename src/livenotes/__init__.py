"""
LiveNotes Backend - Real-time Collaborative Note Store

Users register, log in and manage short text notes they own; every
connected client receives the refreshed note list live.

Version: 1.0.0
"""

__version__ = "1.0.0"
