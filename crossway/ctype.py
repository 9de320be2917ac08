"""ASCII character classification in the style of the C <ctype.h> functions.

Every function accepts either an integer character code or a one-character
string.  Codes outside the ASCII range are never classified as anything.
"""


def _code(c):
    """Return the integer code of C, which may be an int or a 1-char str."""
    if isinstance(c, str):
        return ord(c)
    return c


def islower(c):
    """True for 'a' through 'z'."""
    c = _code(c)
    return ord("a") <= c <= ord("z")


def isupper(c):
    """True for 'A' through 'Z'."""
    c = _code(c)
    return ord("A") <= c <= ord("Z")


def isalpha(c):
    """True for ASCII letters."""
    return islower(c) or isupper(c)


def isdigit(c):
    """True for '0' through '9'."""
    c = _code(c)
    return ord("0") <= c <= ord("9")


def isalnum(c):
    """True for ASCII letters and digits."""
    return isalpha(c) or isdigit(c)


def isxdigit(c):
    """True for hexadecimal digits of either case."""
    code = _code(c)
    return (
        isdigit(code)
        or ord("a") <= code <= ord("f")
        or ord("A") <= code <= ord("F")
    )


def isspace(c):
    """True for space, form feed, newline, carriage return and tabs."""
    return _code(c) in (0x20, 0x0C, 0x0A, 0x0D, 0x09, 0x0B)


def isblank(c):
    """True for space and horizontal tab."""
    return _code(c) in (0x20, 0x09)


def isgraph(c):
    """True for printable characters other than space."""
    return 32 < _code(c) < 127


def isprint(c):
    """True for printable characters including space."""
    return 32 <= _code(c) < 127


def iscntrl(c):
    """True for control characters and DEL."""
    c = _code(c)
    return 0 <= c < 32 or c == 127


def isascii(c):
    """True for codes 0 through 127."""
    return 0 <= _code(c) < 128


def ispunct(c):
    """True for printable characters that are not alphanumeric or space."""
    return isprint(c) and not isalnum(c) and not isspace(c)


def tolower(c):
    """Map an upper-case letter to lower case; leave anything else alone."""
    code = _code(c)
    if isupper(code):
        code = code - ord("A") + ord("a")
    return chr(code) if isinstance(c, str) else code


def toupper(c):
    """Map a lower-case letter to upper case; leave anything else alone."""
    code = _code(c)
    if islower(code):
        code = code - ord("a") + ord("A")
    return chr(code) if isinstance(c, str) else code