"""Statement construction and the CRUD façade."""
