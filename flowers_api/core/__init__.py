"""
Core utilities shared across the invoicing API.

This package hosts:
- configuration helpers (env vars, storage paths, external service URLs)
- the error taxonomy raised by repositories and services
- cross-cutting adapters such as logging, the SMTP mailer and the PDF client

Routers and services depend on these primitives instead of reading
os.environ or talking to SMTP/HTTP directly.
"""
