"""
Core fixed-point primitives: scale table, integer kernels, value types, and
interchange contracts.

Nothing in core depends on a storage or transport: serialization adapters
live in fixdec.serialization.
"""
