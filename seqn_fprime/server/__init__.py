"""HTTP API for the SeqN/FPrime converters (FastAPI)."""
