"""Canonical Intermediate Representation (IR) of a data-contract model.

The IR is the explicit, versioned description of the contract types that a
front end extracts once from the canonical sources. Every target-language
writer reads it; none of them touch the source compiler's symbol API.

The IR carries:
- Types (classes, static classes, enums) with their nested types
- Members (properties, const fields, enum values, methods, constructors)
- Documentation comments and the declaration text needed to recover
  property initializers
"""

IR_VERSION = "1.0"
