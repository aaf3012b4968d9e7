"""
SCM Kernel - infrastructure for the supply-chain fulfillment service.

Provides the shared plumbing every module builds on:
- SQLAlchemy engine, session scope and declarative base
- Typed exception hierarchy with machine-readable codes
- Structured JSON logging with request-scoped context
- Injectable clock for deterministic dates
"""

__version__ = "0.1.0"
