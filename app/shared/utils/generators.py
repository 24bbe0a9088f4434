"""Document ID generation for Firestore writes."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2, used as the document ID for client-side creates."""
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
