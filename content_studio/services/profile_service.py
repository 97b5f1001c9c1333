"""
Profile completeness rules. Both checks are derived from the stored profile
on every call; nothing is persisted.
"""


def is_profile_complete(user) -> bool:
    """A profile is complete once it has a name, a phone number and a document."""
    if user is None:
        return False
    return bool(
        getattr(user, "name", None)
        and getattr(user, "phone", None)
        and getattr(user, "document", None)
    )


def is_first_login(user) -> bool:
    """
    First login: the user only has the basic data that came from Google
    (name, email) and has not filled in a phone number or document yet.
    """
    if user is None:
        return False
    return bool(
        getattr(user, "name", None)
        and getattr(user, "email", None)
        and not getattr(user, "phone", None)
        and not getattr(user, "document", None)
    )
