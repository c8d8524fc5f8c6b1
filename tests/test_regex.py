import pytest
from abn.detect.regex_backend import RegexBackend

TEXT = (
    "Supplier ABN: 51 824 753 556, invoice 12345678901 ref.\n"
    "Group member 31 103 572 158 001 and account 04000000005."
)


@pytest.fixture
def backend():
    return RegexBackend()


def test_finds_valid_abns(backend):
    spans = backend.detect(TEXT)
    assert [s.canonical for s in spans] == ["51 824 753 556", "31 103 572 158 001", "04 000 000 005"]


def test_offsets_point_at_raw_text(backend):
    for s in backend.detect(TEXT):
        assert TEXT[s.start:s.end] == s.text


def test_checksum_failures_dropped(backend):
    # 12345678901 matches the pattern but fails the checksum.
    assert backend.detect("ref 12345678901") == []


def test_group_form_wins_overlap(backend):
    spans = backend.detect("ABN 31 103 572 158 001")
    assert len(spans) == 1
    assert spans[0].type == "ABN_GROUP"


def test_group_zero_falls_back_to_core(backend):
    spans = backend.detect("ABN 31 103 572 158 000")
    assert [(s.type, s.canonical) for s in spans] == [("ABN", "31 103 572 158")]


def test_longer_digit_runs_ignored(backend):
    assert backend.detect("serial 3110357215899999") == []


def test_group_disabled():
    spans = RegexBackend(allow_group=False).detect("ABN 31 103 572 158 001")
    assert [(s.type, s.canonical) for s in spans] == [("ABN", "31 103 572 158")]
