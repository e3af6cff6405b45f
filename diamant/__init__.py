"""Diamant UI: copy React components into your project and keep them in sync."""
