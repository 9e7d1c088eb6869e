"""
Exercise Catalog Library
========================
Shared pieces used by the seed / enrich / verify command-line scripts.

Modules:
  config     - .env-driven settings (paths, Ollama endpoint, delays)
  constants  - tracking-type labels and fixed file names
  db         - PostgreSQL connection-string resolution
  loader     - exercise folder traversal and JSON record handling
  store      - exercises table DDL and upsert
  classifier - Ollama tracking-type classification request
"""
