"""
High-level use cases for the Contatos API.

Each service module orchestrates repositories/adapters to implement business
rules (register, create contact, geocode, look up a CEP, delete an account).

Routers (FastAPI endpoints) call these services instead of touching the
database or the HTTP collaborators directly.
"""
