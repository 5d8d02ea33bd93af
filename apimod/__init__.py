"""apimod -- strict modular REST API generator (Bun + Elysia).

Generates a minimal API skeleton and CRUD modules without ever clobbering
existing files, registers each route in a generated index, and keeps a
ledger of every module created.
"""

__version__ = "1.0.0"
