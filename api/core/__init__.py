"""
Shared, cross-cutting code for the API.

`core/` contains small building blocks that every feature uses
(DB wiring, settings, logging, error mapping). Keep feature-specific SQL in
the corresponding feature package (e.g. `posts/`).
"""
