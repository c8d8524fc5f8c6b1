import pytest

import abn
from abn import ABN, Invalid, InvalidABNError, Reason, Trusted, Valid, format_abn, is_valid, validate

VALID_CORES = ["31103572158", "51824753556", "12004044937", "04000000005"]


# ---- Concrete scenarios -------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["31 103 572 158", "31103572158", " 31 103 572 158 "])
def test_valid_forms(raw):
    result = validate(raw)
    assert isinstance(result, Valid)
    assert result.canonical == "31 103 572 158"
    assert result.reason is None


def test_last_digit_altered():
    result = validate("31 103 572 157")
    assert isinstance(result, Invalid)
    assert result.reason is Reason.CHECKSUM_MISMATCH
    assert result.canonical is None


@pytest.mark.parametrize("raw", ["", " ", None])
def test_empty(raw):
    assert validate(raw).reason is Reason.EMPTY_INPUT


def test_single_characters():
    assert validate("a").reason is Reason.INVALID_CHARACTERS
    assert validate("1").reason is Reason.INVALID_LENGTH


def test_group_abn():
    result = validate("31103572158001")
    assert result.ok
    assert result.canonical == "31 103 572 158 001"
    assert result.abn == ABN("31103572158", "001")
    assert result.abn.is_group


def test_group_zero():
    assert validate("31103572158000").reason is Reason.INVALID_GROUP_NUMBER


def test_group_disabled():
    result = validate("31103572158001", allow_group=False)
    assert result.reason is Reason.INVALID_LENGTH
    assert result.length == 14


# ---- Priority of failures -----------------------------------------------------------------

def test_characters_before_length():
    assert validate("12a").reason is Reason.INVALID_CHARACTERS


def test_group_number_before_checksum():
    # Core fails the checksum too, but the group suffix is reported first.
    assert validate("31103572157000").reason is Reason.INVALID_GROUP_NUMBER


def test_group_with_bad_core():
    assert validate("31103572157001").reason is Reason.CHECKSUM_MISMATCH


# ---- Properties ---------------------------------------------------------------------------

@pytest.mark.parametrize("core", VALID_CORES)
def test_formatting_is_idempotent(core):
    first = validate(core).canonical
    assert validate(first).canonical == first


@pytest.mark.parametrize("core", VALID_CORES)
def test_whitespace_insensitive(core):
    spaced = "  " + "\t ".join(core) + "\n"
    assert validate(spaced) == validate(core)


@pytest.mark.parametrize("raw", ["31 103 572 15x", "31_103_572_158", "x" * 11, "3110357215-8"])
def test_bad_characters_never_checksum(raw):
    assert validate(raw).reason is Reason.INVALID_CHARACTERS


@pytest.mark.parametrize("n", [n for n in range(1, 40) if n not in (11, 14)])
def test_bad_lengths(n):
    assert validate("7" * n).reason is Reason.INVALID_LENGTH


@pytest.mark.parametrize("core", VALID_CORES)
def test_adjacent_transpositions_detected(core):
    for i in range(len(core) - 1):
        if core[i] == core[i + 1]:
            continue
        swapped = core[:i] + core[i + 1] + core[i] + core[i + 2:]
        assert validate(swapped).reason is Reason.CHECKSUM_MISMATCH, swapped


def test_huge_input_rejected_by_length():
    assert validate("1" * 1_000_000).reason is Reason.INVALID_LENGTH


# ---- Call conventions ---------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["31 103 572 158", "31103572157", "", None, "a", "31103572158001", "31103572158000"])
def test_all_call_styles_agree(raw):
    expected = validate(raw)
    assert abn.validate(raw) == expected
    assert ABN.validate(raw) == expected
    assert is_valid(raw) is expected.ok
    assert format_abn(raw) == expected.canonical
    assert bool(expected) is expected.ok
    if expected.ok:
        assert ABN.parse(raw) == expected.abn
    else:
        with pytest.raises(InvalidABNError) as exc:
            ABN.parse(raw)
        assert exc.value.reason is expected.reason
        assert exc.value.result == expected


def test_parse_error_is_value_error():
    with pytest.raises(ValueError, match="checksum"):
        ABN.parse("31 103 572 157")


def test_abn_stringifies_to_canonical():
    assert str(ABN.parse("51824753556")) == "51 824 753 556"
    assert f"Your ABN {ABN.parse('31103572158001')} looks OK" == "Your ABN 31 103 572 158 001 looks OK"


def test_trusted_skips_revalidation():
    known = ABN.parse("31103572158")
    assert validate(Trusted(known)) == Valid(known)


def test_trusted_is_taken_at_its_word():
    # Trusted values are not re-checked; only wrap ABNs that came from validate/parse.
    bogus = ABN("00000000000")
    assert validate(Trusted(bogus)).canonical == "00 000 000 000"


def test_plain_abn_object_is_not_trusted():
    assert validate(ABN("31103572158")).reason is Reason.EMPTY_INPUT


def test_trusted_group_respects_group_toggle():
    group = ABN.parse("31103572158001")
    result = validate(Trusted(group), allow_group=False)
    assert result.reason is Reason.INVALID_LENGTH
    assert result.length == 14
    assert validate(Trusted(group)) == Valid(group)
    assert validate(Trusted(ABN.parse("31103572158")), allow_group=False).ok
