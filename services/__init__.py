"""Application services: authentication/session lifecycle and owner-scoped customers."""
