"""
Service layer abstraction.

Each service encapsulates the business logic for a domain: the store
query, the normalisation of raw documents and the error state a view
falls back to.  API handlers only translate results and exceptions
into HTTP responses.
"""
