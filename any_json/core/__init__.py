"""Core dispatch layer: value model, errors, format policy, registry, facade.

WHY: The core package holds the parts every entry point shares: how a
format name is normalized, which formats are binary, which codec serves
which name, and the failure semantics of decode/encode.

HOW: values.py defines the structured value model, errors.py the
exception hierarchy, formats.py the name normalization and encoding
policy, registry.py the immutable codec table and converter.py the
decode/encode facade.

RULES:
- The core never logs, retries or writes files
- Nothing here depends on a specific format library
"""
