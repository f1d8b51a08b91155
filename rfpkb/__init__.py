"""
RFP Knowledge Base

This package contains a multi-tenant knowledge base API for proposal
teams: companies, people and projects scoped per organization, document
ingest into draft records, and a canned-response assistant.
"""

__version__ = "1.0.0"
