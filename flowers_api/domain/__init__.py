"""Domain rules that do not depend on storage: collections and the invoice aggregate."""
