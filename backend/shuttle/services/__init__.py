"""Services Layer — orchestration of registries and collaborator clients.

Invariants:
    - Services never touch HTTP request/response objects
    - Collaborator calls happen before the registry mutation they feed
"""
