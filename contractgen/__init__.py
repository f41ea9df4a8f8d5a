"""contractgen — mirror a canonical data-contract model into target-language SDK sources."""

__version__ = "0.3.0"
