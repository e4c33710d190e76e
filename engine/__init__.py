"""Headless season flow: setup, decisions, turns, scoring, session."""
