"""NiceGUI interface - thin presentation layer over ChatSession.

Responsibilities:
    - Mode selector that starts a fresh conversation
    - Quick-action prompts per mode
    - Live assistant bubble updated from cumulative deltas
    - Error notifications from the session's error callback

Contains no streaming logic. Delegates every turn to ChatSession.
"""
