"""Translation helpers shared by the target-language writers.

Each helper covers one concern of mapping canonical constructs to a target
language: identifiers, types, documentation comments and initializer
expressions.
"""
