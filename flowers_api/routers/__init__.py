"""
FastAPI routers grouped by domain (reference entities, invoices, payments,
statements, shared state).

Each module exposes an APIRouter (or a factory for one) that app.py includes.
"""
