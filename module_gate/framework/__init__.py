"""Project-specific framework utilities.

This package holds the document-level glue around the `modulekit` kernel:

- `module_gate.framework.plugin`: plugin/project documents owning module lists
- `module_gate.framework.request`: build requests parsed from user-facing names

For the descriptor model, codec and eligibility policy, use `modulekit`.
"""
