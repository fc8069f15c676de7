"""Classic sample: legacy declarative models, schema deployed with create_all."""
