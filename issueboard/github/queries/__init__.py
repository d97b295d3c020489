"""Bundled GraphQL query documents."""
