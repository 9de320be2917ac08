"""printf-style formatting with the kernel's conversion rules.

Integer conversions follow a 32-bit target: plain, ``l``, ``t`` and ``z``
arguments are 32 bits wide, ``ll`` and ``j`` arguments 64 bits, ``h`` 16
bits and ``hh`` 8 bits.  Arguments are truncated to those widths.
Floating-point conversions and ``%n`` are not supported and render a
marker instead.
"""

import enum
from dataclasses import dataclass

from .ctype import isdigit, isprint
from .rounding import round_down

CHAR_BIT = 8
INT_MAX = 2147483647
INT_MIN = -INT_MAX - 1
UINT_MAX = 4294967295
LLONG_MAX = 9223372036854775807
LLONG_MIN = -LLONG_MAX - 1
ULLONG_MAX = 18446744073709551615
SIZE_MAX = UINT_MAX
UINT64_MAX = ULLONG_MAX

# Size of the digit buffer used for an integer conversion.
_BUF_SIZE = 64


class _Flag(enum.IntFlag):
    MINUS = 1 << 0
    PLUS = 1 << 1
    SPACE = 1 << 2
    POUND = 1 << 3
    ZERO = 1 << 4
    GROUP = 1 << 5


_FLAG_CHARS = {
    "-": _Flag.MINUS,
    "+": _Flag.PLUS,
    " ": _Flag.SPACE,
    "#": _Flag.POUND,
    "0": _Flag.ZERO,
    "'": _Flag.GROUP,
}


class _ArgType(enum.Enum):
    CHAR = "hh"
    SHORT = "h"
    INT = ""
    INTMAX = "j"
    LONG = "l"
    LONGLONG = "ll"
    PTRDIFFT = "t"
    SIZET = "z"


_ARG_BITS = {
    _ArgType.CHAR: 8,
    _ArgType.SHORT: 16,
    _ArgType.INT: 32,
    _ArgType.INTMAX: 64,
    _ArgType.LONG: 32,
    _ArgType.LONGLONG: 64,
    _ArgType.PTRDIFFT: 32,
    _ArgType.SIZET: 32,
}


@dataclass(frozen=True)
class _IntegerBase:
    base: int
    digits: str
    x: str
    group: int


_BASE_D = _IntegerBase(10, "0123456789", "", 3)
_BASE_O = _IntegerBase(8, "01234567", "", 3)
_BASE_X = _IntegerBase(16, "0123456789abcdef", "x", 4)
_BASE_UPPER_X = _IntegerBase(16, "0123456789ABCDEF", "X", 4)

_UNSIGNED_BASES = {"o": _BASE_O, "u": _BASE_D, "x": _BASE_X, "X": _BASE_UPPER_X}


@dataclass
class _Conversion:
    flags: _Flag
    width: int
    precision: int
    type: _ArgType


def _to_signed(value, bits):
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _to_unsigned(value, bits):
    return value & ((1 << bits) - 1)


def _int_arg(arg):
    if not isinstance(arg, int):
        raise TypeError(f"integer argument expected, got {type(arg).__name__}")
    return arg


class _Arguments:
    """Sequential access to the values consumed by a format string."""

    def __init__(self, args):
        self._iter = iter(args)

    def next(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def next_int(self):
        return _to_signed(_int_arg(self.next()), 32)


def _parse_conversion(fmt, pos, args):
    """Parse flags, width, precision and type starting at POS."""
    n = len(fmt)
    flags = _Flag(0)
    while pos < n and fmt[pos] in _FLAG_CHARS:
        flags |= _FLAG_CHARS[fmt[pos]]
        pos += 1
    if flags & _Flag.MINUS:
        flags &= ~_Flag.ZERO
    if flags & _Flag.PLUS:
        flags &= ~_Flag.SPACE

    width = 0
    if pos < n and fmt[pos] == "*":
        pos += 1
        width = args.next_int()
    else:
        while pos < n and isdigit(fmt[pos]):
            width = width * 10 + ord(fmt[pos]) - ord("0")
            pos += 1
    if width < 0:
        width = -width
        flags |= _Flag.MINUS

    precision = -1
    if pos < n and fmt[pos] == ".":
        pos += 1
        if pos < n and fmt[pos] == "*":
            pos += 1
            precision = args.next_int()
        else:
            precision = 0
            while pos < n and isdigit(fmt[pos]):
                precision = precision * 10 + ord(fmt[pos]) - ord("0")
                pos += 1
        if precision < 0:
            precision = -1
    if precision >= 0:
        flags &= ~_Flag.ZERO

    arg_type = _ArgType.INT
    for modifier in ("hh", "ll", "h", "j", "l", "t", "z"):
        if fmt.startswith(modifier, pos):
            arg_type = _ArgType(modifier)
            pos += len(modifier)
            break

    return _Conversion(flags, width, precision, arg_type), pos


def _format_integer(value, is_signed, negative, base, conv):
    """Render the absolute VALUE according to BASE and CONV."""
    flags = conv.flags

    sign = ""
    if is_signed:
        if flags & _Flag.PLUS:
            sign = "-" if negative else "+"
        elif flags & _Flag.SPACE:
            sign = "-" if negative else " "
        elif negative:
            sign = "-"

    x = base.x if (flags & _Flag.POUND) and value else ""

    # Digits are accumulated least significant first.
    digits = []
    digit_cnt = 0
    while value > 0:
        if flags & _Flag.GROUP and digit_cnt > 0 and digit_cnt % base.group == 0:
            digits.append(",")
        value, digit = divmod(value, base.base)
        digits.append(base.digits[digit])
        digit_cnt += 1

    precision = 1 if conv.precision < 0 else conv.precision
    while len(digits) < precision and len(digits) < _BUF_SIZE - 1:
        digits.append("0")
    if flags & _Flag.POUND and base.base == 8 and (not digits or digits[-1] != "0"):
        digits.append("0")

    pad_cnt = max(0, conv.width - len(digits) - (2 if x else 0) - (1 if sign else 0))

    parts = []
    if not flags & (_Flag.MINUS | _Flag.ZERO):
        parts.append(" " * pad_cnt)
    parts.append(sign)
    if x:
        parts.append("0" + x)
    if flags & _Flag.ZERO:
        parts.append("0" * pad_cnt)
    parts.append("".join(reversed(digits)))
    if flags & _Flag.MINUS:
        parts.append(" " * pad_cnt)
    return "".join(parts)


def _format_string(text, conv):
    if conv.width > len(text):
        padding = " " * (conv.width - len(text))
        if conv.flags & _Flag.MINUS:
            return text + padding
        return padding + text
    return text


def _convert(spec, conv, args):
    """Perform the conversion SPEC, consuming values from ARGS as needed."""
    bits = _ARG_BITS[conv.type]

    if spec in "di":
        value = _to_signed(_int_arg(args.next()), bits)
        return _format_integer(abs(value), True, value < 0, _BASE_D, conv)

    if spec in _UNSIGNED_BASES:
        value = _to_unsigned(_int_arg(args.next()), bits)
        return _format_integer(value, False, False, _UNSIGNED_BASES[spec], conv)

    if spec == "c":
        arg = args.next()
        if isinstance(arg, str):
            if len(arg) != 1:
                raise TypeError("%c requires a single character")
            ch = arg
        else:
            ch = chr(_int_arg(arg) & 0xFF)
        return _format_string(ch, conv)

    if spec == "s":
        arg = args.next()
        if arg is None:
            arg = "(null)"
        if not isinstance(arg, str):
            raise TypeError(f"%s requires a string, got {type(arg).__name__}")
        text = arg.split("\0", 1)[0]
        if conv.precision >= 0:
            text = text[: conv.precision]
        return _format_string(text, conv)

    if spec == "p":
        arg = args.next()
        value = 0 if arg is None else _to_unsigned(_int_arg(arg), 32)
        conv.flags = _Flag.POUND
        return _format_integer(value, False, False, _BASE_X, conv)

    if spec in "feEgGn":
        return f"<<no %{spec} in kernel>>"

    return f"<<no %{spec} conversion>>"


def format(fmt, *args):
    """Format ARGS according to the printf-style string FMT."""
    args_reader = _Arguments(args)
    out = []
    pos = 0
    n = len(fmt)
    while pos < n:
        ch = fmt[pos]
        if ch != "%":
            out.append(ch)
            pos += 1
            continue
        pos += 1
        if pos < n and fmt[pos] == "%":
            out.append("%")
            pos += 1
            continue
        conv, pos = _parse_conversion(fmt, pos, args_reader)
        if pos >= n:
            raise ValueError("format string ends inside a conversion")
        out.append(_convert(fmt[pos], conv, args_reader))
        pos += 1
    return "".join(out)


def snprintf(buf_size, fmt, *args):
    """Format into a buffer of BUF_SIZE characters including the terminator.

    Returns the text that fits (at most BUF_SIZE - 1 characters) and the
    length the full output would have had.
    """
    if buf_size < 0:
        raise ValueError(f"buffer size must be non-negative, got {buf_size}")
    text = format(fmt, *args)
    return text[: max(buf_size - 1, 0)], len(text)


def hex_dump(ofs, data, ascii=False):
    """Render DATA as hex bytes, 16 per line, with offsets starting at OFS.

    If ASCII is true, printable characters are shown alongside.
    """
    per_line = 16
    data = bytes(data)
    lines = []
    while data:
        start = ofs % per_line
        end = min(per_line, start + len(data))
        n = end - start
        chunk = data[:n]

        parts = [f"{round_down(ofs, per_line):08x}  ", "   " * start]
        for i, byte in enumerate(chunk, start):
            parts.append(f"{byte:02x}{'-' if i == per_line // 2 - 1 else ' '}")
        if ascii:
            parts.append("   " * (per_line - end))
            parts.append("|")
            parts.append(" " * start)
            parts.append("".join(chr(b) if isprint(b) else "." for b in chunk))
            parts.append(" " * (per_line - end))
            parts.append("|")
        lines.append("".join(parts) + "\n")

        ofs += n
        data = data[n:]
    return "".join(lines)


_SIZE_UNITS = ("bytes", "kB", "MB", "GB", "TB")


def human_readable_size(size):
    """Describe SIZE bytes in a human-readable form, e.g. "256 kB"."""
    if not 0 <= size <= UINT64_MAX:
        raise ValueError(f"size must fit in 64 unsigned bits, got {size}")
    if size == 1:
        return "1 byte"
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size //= 1024
        unit += 1
    return f"{size} {_SIZE_UNITS[unit]}"