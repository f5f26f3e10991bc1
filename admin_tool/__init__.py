"""Firebase user reconciliation and admin-role tooling."""
