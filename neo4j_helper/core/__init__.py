"""Execution layer: driver lifecycle, errors, logging and the CRUD contract."""
