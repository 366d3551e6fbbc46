"""
NoteCollab Backend - Collaborative Note Editing Platform

Notes with per-user and per-group sharing, version history, notifications
and live co-editing over websockets.
"""

__version__ = "1.0.0"
