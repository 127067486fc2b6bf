"""Manifest (METALOG) input handling.

This package contains:
- record: ManifestRecord and the single-line parser
- reader: file scanning with comment/blank skipping and the malformed-line policy
- settings: AuditSettings loaded from a TOML file
"""
