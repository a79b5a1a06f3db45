"""Search engine layer — Backends that index and query searchable models.

Built-in engines:
  - elasticsearch: Elasticsearch v8+ (phrase-prefix full-text search)

Implement ``Engine`` to connect your own search backend.
"""
