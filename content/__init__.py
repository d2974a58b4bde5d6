"""
content
Card source: file parsing, record schema, fallback loading.
"""
