"""Deck API — characters, affiliations, user decks and bearer-token authentication."""
