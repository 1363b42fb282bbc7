import random
import string

_CHARSET = string.ascii_lowercase + string.digits


def rand_string(n: int) -> str:
    """Random lowercase alphanumeric string, used to keep test resource names unique."""
    return "".join(random.choices(_CHARSET, k=n))
