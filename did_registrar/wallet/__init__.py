"""Abstract and reference key management for the registrar."""
