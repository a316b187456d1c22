"""
Configuration module.

Default engine parameters, the static knowledge-base tables, YAML override
loading and validation.
"""
