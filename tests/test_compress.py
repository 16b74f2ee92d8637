import pytest

from digestbox.md6 import compress as md6c
from digestbox.md6.compress import (
    MD6Error,
    compress,
    make_control_word,
    make_node_id,
    pack,
    standard_compress,
)

ZERO_KEY = [0] * 8
BLOCK = list(range(64))


def test_control_word_fields_decode():
    v = make_control_word(104, 64, 1, 4032, 5, 256)
    assert (v >> 60) & 0xF == 0
    assert (v >> 48) & 0xFFF == 104
    assert (v >> 40) & 0xFF == 64
    assert (v >> 36) & 0xF == 1
    assert (v >> 20) & 0xFFFF == 4032
    assert (v >> 12) & 0xFF == 5
    assert v & 0xFFF == 256


def test_control_word_digest_only():
    assert make_control_word(0, 0, 0, 0, 0, 512) == 512


def test_node_id_fields_decode():
    u = make_node_id(3, 12345)
    assert u >> 56 == 3
    assert u & ((1 << 56) - 1) == 12345


def test_node_id_stays_in_word():
    assert make_node_id(255, (1 << 56) - 1) == (1 << 64) - 1


def test_pack_layout():
    key = [11, 12, 13, 14, 15, 16, 17, 18]
    n = pack(key, 1, 7, 72, 64, 1, 0, 8, 128, BLOCK)
    assert len(n) == 89
    assert n[:15] == list(md6c.Q)
    assert n[15:23] == key
    assert n[23] == make_node_id(1, 7)
    assert n[24] == make_control_word(72, 64, 1, 0, 8, 128)
    assert n[25:] == BLOCK


def test_pack_starts_with_sqrt6_constant():
    n = pack(ZERO_KEY, 1, 0, 72, 64, 1, 0, 0, 128, BLOCK)
    assert n[0] == 0x7311C2812425CFA0
    assert n[14] == 0x0D6F3522631EFFCB


def test_pack_rejects_short_block():
    with pytest.raises(MD6Error) as err:
        pack(ZERO_KEY, 1, 0, 72, 64, 1, 0, 0, 128, [0] * 10)
    assert err.value.code == md6c.NULL_B


def test_pack_rejects_short_key():
    with pytest.raises(MD6Error) as err:
        pack([0] * 3, 1, 0, 72, 64, 1, 0, 0, 128, BLOCK)
    assert err.value.code == md6c.NULL_K


def test_compress_output_shape():
    n = pack(ZERO_KEY, 1, 0, 72, 64, 1, 0, 0, 128, BLOCK)
    out = compress(n, 72)
    assert len(out) == 16
    assert all(0 <= w < 1 << 64 for w in out)


def test_compress_zero_rounds_returns_tail_of_input():
    n = pack(ZERO_KEY, 1, 0, 0, 64, 1, 0, 0, 128, BLOCK)
    assert compress(n, 0) == n[73:89]


def test_compress_is_deterministic():
    n = pack(ZERO_KEY, 1, 0, 40, 64, 1, 0, 0, 128, BLOCK)
    assert compress(n, 40) == compress(list(n), 40)


def test_compress_depends_on_input():
    n = pack(ZERO_KEY, 1, 0, 40, 64, 1, 0, 0, 128, BLOCK)
    changed = list(n)
    changed[88] ^= 1
    assert compress(n, 40) != compress(changed, 40)


def test_compress_does_not_modify_input():
    n = pack(ZERO_KEY, 1, 0, 40, 64, 1, 0, 0, 128, BLOCK)
    before = list(n)
    compress(n, 40)
    assert n == before


@pytest.mark.parametrize("rounds", [-1, 256])
def test_compress_rejects_bad_rounds(rounds):
    n = pack(ZERO_KEY, 1, 0, 40, 64, 1, 0, 0, 128, BLOCK)
    with pytest.raises(MD6Error) as err:
        compress(n, rounds)
    assert err.value.code == md6c.BAD_R


def test_compress_rejects_wrong_length():
    with pytest.raises(MD6Error) as err:
        compress([0] * 88, 10)
    assert err.value.code == md6c.NULL_N


def test_standard_compress_matches_pack_then_compress():
    key = [1, 2, 3, 4, 5, 6, 7, 8]
    args = (key, 2, 3, 80, 64, 0, 1024, 8, 256, BLOCK)
    assert standard_compress(*args) == compress(pack(*args), 80)


def test_standard_compress_final_flag_changes_result():
    a = standard_compress(ZERO_KEY, 1, 0, 72, 64, 0, 0, 0, 128, BLOCK)
    b = standard_compress(ZERO_KEY, 1, 0, 72, 64, 1, 0, 0, 128, BLOCK)
    assert a != b


@pytest.mark.parametrize(
    "overrides, code",
    [
        ({"r": 256}, md6c.BAD_R),
        ({"r": -1}, md6c.BAD_R),
        ({"L": 256}, md6c.BAD_L),
        ({"L": -1}, md6c.BAD_L),
        ({"ell": 256}, md6c.BAD_ELL),
        ({"ell": -1}, md6c.BAD_ELL),
        ({"p": 4097}, md6c.BAD_P),
        ({"p": -1}, md6c.BAD_P),
        ({"d": 0}, md6c.BADHASHLEN),
        ({"d": 513}, md6c.BADHASHLEN),
        ({"key_words": None}, md6c.NULL_K),
        ({"block": None}, md6c.NULL_B),
    ],
)
def test_standard_compress_validation(overrides, code):
    kwargs = dict(
        key_words=ZERO_KEY, ell=1, i=0, r=72, L=64, z=1, p=0, keylen=0, d=128,
        block=BLOCK,
    )
    kwargs.update(overrides)
    with pytest.raises(MD6Error) as err:
        standard_compress(**kwargs)
    assert err.value.code == code


def test_standard_compress_accepts_boundaries():
    out = standard_compress(ZERO_KEY, 255, 0, 0, 255, 1, 4096, 0, 512, [0] * 64)
    assert len(out) == 16


def test_md6_error_is_value_error():
    with pytest.raises(ValueError):
        compress([0] * 89, 300)