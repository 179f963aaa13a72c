"""
Nebula Maintenance API
======================

Maintenance request intake, AI triage and technician scheduling for the
Nebula property-management app.
"""

__version__ = "1.0.0"
