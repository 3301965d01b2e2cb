"""Domain layer (pure logic).

- Keep grid selection and query rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no upstream calls.
- Prefer deterministic functions (dates passed in as arguments, never datetime.now()).
"""
