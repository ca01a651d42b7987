"""
Normalize package: models and helpers turning raw tracker payloads into typed entities.
"""
