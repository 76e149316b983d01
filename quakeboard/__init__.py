"""Quakeboard - unattended seismic event display.

Rotates a world map, an optional regional map and per-event detail cards,
with a scrolling ticker along the bottom of the screen.
"""
