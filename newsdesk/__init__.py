"""Guardian-style news search client: fetch, parse, display."""
