"""Infrastructure layer: database access for tax records."""
