"""Domain layer — identifiers, rules, markers, and the template engine.

This layer depends only on the stdlib.
It must never import from services, config, output, or commands.
"""
