"""Domain layer: units, name matching, rules, and options.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
