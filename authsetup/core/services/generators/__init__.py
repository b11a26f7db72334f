"""
Generators — render NextAuth source files from the detected project context.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile``.
"""
