from random import Random

from event_checkin.registrants.codes import MANUAL_CODE_ALPHABET, generate_manual_code, normalize_manual_code


def test_manual_code_is_six_upper_alnum_chars():
    for _ in range(200):
        code = generate_manual_code()
        assert len(code) == 6
        assert all(ch in MANUAL_CODE_ALPHABET for ch in code)


def test_manual_code_uses_supplied_rng():
    assert generate_manual_code(rng=Random(7)) == generate_manual_code(rng=Random(7))


def test_normalize_manual_code():
    assert normalize_manual_code("  ab12cd ") == "AB12CD"
