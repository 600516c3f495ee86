"""Flower-export invoicing backend (entities, invoices, PDF and email documents)."""
