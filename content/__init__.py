"""Static reference tables: locations, setup options, decisions, events, headlines."""
