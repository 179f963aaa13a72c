"""
Ticket Interfaces Layer
========================

Interface adapters (controllers) for the maintenance ticket module.
"""

from nebula_api.tickets.interfaces.controllers import tickets_router

__all__ = ["tickets_router"]
