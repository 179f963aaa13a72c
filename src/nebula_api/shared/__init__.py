"""
Shared Kernel Module
====================

Generic infrastructure used by every bounded context: structured logging,
HTTP middleware and exception handlers.

DO NOT add ticket business logic to the shared kernel.
"""
