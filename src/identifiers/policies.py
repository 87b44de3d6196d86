def can_manage_identifier(caller, owner_id) -> bool:
    """
    Owner-only: only the principal that owns the identifier may read or rotate its keys.
    """
    principal = getattr(caller, "principal_id", None)
    return bool(principal) and str(principal) == str(owner_id)
