"""
authsetup — wire NextAuth.js authentication into an existing Next.js project.
"""

__version__ = "0.1.0"
