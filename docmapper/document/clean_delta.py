from typing import Any


def clean_delta(delta: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]] | None:
    """ Drop the empty halves of a {"$set": ..., "$unset": ...} delta.

    Returns None when there is nothing to apply, so that callers can tell a no-op apart from an empty update.
    Both "$set" and "$unset" are expected to be present. The input is not modified. """
    cleaned = dict(delta)
    if not cleaned["$set"] and not cleaned["$unset"]:
        return None
    if not cleaned["$set"]:
        del cleaned["$set"]
    if not cleaned["$unset"]:
        del cleaned["$unset"]
    return cleaned
