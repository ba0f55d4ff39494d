"""
Domain layer - value types, persistence entities and collaborator interfaces.

This layer contains the data the initiator reasons about, independent of
how requests, mappings and workflow states are fetched.
"""
