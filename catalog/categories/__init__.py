"""
Category hierarchy package.

Responsibilities:
- Model category nodes as parent-pointer records.
- Expose read-only store capabilities (children, existence, active state).
- Resolve a root category into the flat set of its descendant ids,
  rejecting cycles and hierarchies deeper than the configured ceiling.
"""
