"""
Catalog snapshot ingestion.

Responsibilities:
- Read the category and business CSV snapshots.
- Normalize them into the canonical category / business schema.
"""
