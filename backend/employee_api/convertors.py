"""
Employee API — Path Convertors
===============================

What:  The `int32` path convertor used for `/employees/{employee_id:int32}`.
How:   Registered with Starlette at import time, before any route is built.
       The regex only matches decimal strings inside the signed 32-bit range
       the employees table's id column can hold, so an id that is not a
       number or is out of range matches no route at all and is answered by
       the routing-miss handler instead of reaching the store.

Matches:
    "7", "007", "+7", "-7", "2147483647", "-2147483648"
Misses:
    "abc", "1.5", "2147483648", "-2147483649", "99999999999999999999"
"""

from starlette.convertors import Convertor, register_url_convertor

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Decimal magnitudes 0..2147483647, split digit by digit below the bound
_MAGNITUDE = (
    r"(?:[0-9]{1,9}"
    r"|1[0-9]{9}"
    r"|20[0-9]{8}"
    r"|21[0-3][0-9]{7}"
    r"|214[0-6][0-9]{6}"
    r"|2147[0-3][0-9]{5}"
    r"|21474[0-7][0-9]{4}"
    r"|214748[0-2][0-9]{3}"
    r"|2147483[0-5][0-9]{2}"
    r"|21474836[0-3][0-9]"
    r"|214748364[0-7])"
)


class Int32Convertor(Convertor):
    """Signed 32-bit integer path parameter."""

    regex = rf"(?:-0*2147483648|[-+]?0*{_MAGNITUDE})"

    def convert(self, value: str) -> int:
        return int(value)

    def to_string(self, value: int) -> str:
        value = int(value)
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"{value} is outside the int32 range")
        return str(value)


register_url_convertor("int32", Int32Convertor())
