import pytest

from crossway import ctype


def test_letters_and_digits():
    assert ctype.isalpha("a")
    assert ctype.isalpha("Z")
    assert not ctype.isalpha("1")
    assert ctype.isdigit("7")
    assert not ctype.isdigit("x")
    assert ctype.isxdigit("F")
    assert ctype.isxdigit("c")
    assert not ctype.isxdigit("g")


def test_space_classes():
    for ch in " \f\n\r\t\v":
        assert ctype.isspace(ch)
    assert ctype.isblank(" ")
    assert ctype.isblank("\t")
    assert not ctype.isblank("\n")


def test_punct_and_print():
    assert ctype.ispunct("!")
    assert not ctype.ispunct(" ")
    assert not ctype.ispunct("a")
    assert ctype.isprint(" ")
    assert not ctype.isgraph(" ")
    assert ctype.iscntrl(127)
    assert ctype.iscntrl(0)
    assert not ctype.iscntrl(-1)


def test_ascii_range():
    assert ctype.isascii(0)
    assert ctype.isascii(127)
    assert not ctype.isascii(128)
    assert not ctype.isalpha(200)


@pytest.mark.parametrize("code", range(128))
def test_invariants_over_ascii(code):
    assert ctype.isalnum(code) == (ctype.isalpha(code) or ctype.isdigit(code))
    assert ctype.isupper(code) == chr(code).isupper()
    assert ctype.islower(code) == chr(code).islower()
    if ctype.isgraph(code):
        assert ctype.isprint(code)
    assert ctype.isprint(code) != ctype.iscntrl(code)


def test_case_mapping_strings():
    assert ctype.toupper("a") == "A"
    assert ctype.tolower("Q") == "q"
    assert ctype.toupper("5") == "5"
    assert ctype.tolower("!") == "!"


def test_case_mapping_codes():
    assert ctype.tolower(ord("Q")) == ord("q")
    assert ctype.toupper(ord("z")) == ord("Z")
    assert ctype.toupper(200) == 200


def test_multi_character_string_rejected():
    with pytest.raises(TypeError):
        ctype.isalpha("ab")