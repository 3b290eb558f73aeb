"""Interaction pipeline: user events to state updates."""
