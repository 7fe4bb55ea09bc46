"""Routing: ordered route table over Express-style path templates.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""
