"""
Shared, cross-cutting code for the gateway.

`core/` holds the building blocks every feature uses (settings, store
handles, errors, audit logging). Store-specific queries and request handling
live in the feature packages (`users/`, `products/`, `buckets/`).
"""
