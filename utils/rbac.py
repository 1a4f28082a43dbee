from django.contrib.auth import get_user_model


# Canonical role names
ROLE_VENDOR = "vendor"
ROLE_ADMIN = "admin"


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user from the DB with only the fields we need.

    Returns None if the user is not authenticated. A token issued before a
    role change still carries the old role claim, so the database is the
    source of truth.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    return User.objects.only("id", "role", "is_superuser").filter(pk=getattr(user, "pk", None)).first()


def is_vendor(user) -> bool:
    """Vendor check verified against the database. Admins count as vendors."""
    db_user = _fetch_user_from_db(user)
    if not db_user:
        return False
    return db_user.role in (ROLE_VENDOR, ROLE_ADMIN) or bool(db_user.is_superuser)
