import uuid

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def is_valid_guid(value: str) -> bool:
    """Accept the textual UUID forms: hyphenated, bare hex, braced, urn:uuid."""
    try:
        uuid.UUID(value.strip())
    except (ValueError, AttributeError):
        return False
    return True


def new_guid() -> str:
    return str(uuid.uuid4())


def to_int32(value) -> int:
    """
    Narrow a stored integer to a signed 32-bit value.

    Out-of-range values wrap around (two's complement), so 2**31 becomes
    -2**31 and 2**32 + 5 becomes 5. Integral floats are accepted because some
    JSON backends hand numbers back as floats.
    """
    if isinstance(value, bool):
        value = int(value)
    elif isinstance(value, float):
        if not value.is_integer():
            raise TypeError(f"expected an integral value, got {value!r}")
        value = int(value)
    elif not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")

    return ((value - INT32_MIN) % 2**32) + INT32_MIN
