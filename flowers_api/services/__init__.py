"""
High-level use cases for the invoicing API.

Each entity module exposes list/add/update/delete functions built on
``EntityService``; ``invoices`` adds the edit-draft lifecycle, ``statements``
and ``document_service`` build account statements, PDFs and emails, and
``hydration`` holds the shared client-side state container.

Routers (FastAPI endpoints) call these services instead of touching the
repositories directly.
"""
