"""
Infrastructure Layer
=====================

Low-level technical concerns shared by all modules:
- Hosted store connection management
- LLM client
"""
