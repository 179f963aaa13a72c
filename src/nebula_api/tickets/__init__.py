"""
Tickets Module
==============

Bounded context for tenant maintenance requests.

Responsibilities:
- Ingest tenant requests and triage them by category and severity (LLM)
- Fall back to a fixed classification when triage fails
- Schedule technicians and notify the scheduling webhook
- List requests and technicians
"""
