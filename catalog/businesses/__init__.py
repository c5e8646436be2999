"""
Business browsing by category tree.

Responsibilities:
- Model the ranking inputs assembled from the business store.
- Filter the business snapshot by category membership with storage-level pagination.
- Orchestrate "all active businesses under category X, best rated first".
"""
