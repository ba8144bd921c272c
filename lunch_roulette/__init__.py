"""
Lunch roulette service.

Picks one restaurant near a location with a session-aware, history-weighted
random draw, optionally scoped to user-chosen buildings, and annotates the
pick with a walking distance estimate.
"""
