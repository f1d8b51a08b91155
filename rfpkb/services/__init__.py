"""
Services

Domain logic behind the API: the tenant-scoped record store, dashboard
aggregation, document storage, ingest and the chat assistant.
"""
