"""Modern sample: 2.0-style typed models, schema deployed with Alembic."""
