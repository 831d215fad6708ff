"""Declarative YAML screen documents parsed into a canonical model.

The `screendoc` package turns a human-authored YAML document describing
application screens, form fields, actions, wizards and sections into a
single immutable, strongly-typed document, or into a batched list of
path-qualified diagnostics when the document is malformed.

Key features:
- two authoring shapes (screens keyed by name, or a legacy array of named
  entries) unified into one canonical shape;
- dispatch over roughly forty field types with attribute aliases and a
  forward-compatible fallback for unknown types;
- collect-all structural validation with dot/bracket paths and source
  positions;
- a pure, synchronous pipeline that never raises on malformed input.
"""
