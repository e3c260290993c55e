import pytest

from isj_geocoder.errors import NumeralDomainError
from isj_geocoder.models import ParsedAddress
from isj_geocoder.parser import AddressTokenizer


@pytest.fixture
def tokenizer():
    return AddressTokenizer()


def test_chome_is_folded_into_name(tokenizer):
    parsed = tokenizer.tokenize("東京都千代田区丸の内1丁目2-3")
    assert parsed == ParsedAddress(name="東京都千代田区丸の内一丁目", numbers=("2-", "3"))


def test_fullwidth_input_matches_halfwidth(tokenizer):
    assert tokenizer.tokenize("１丁目２−３") == tokenizer.tokenize("1丁目2-3")
    assert tokenizer.tokenize("丸の内１丁目２－３") == tokenizer.tokenize("丸の内1丁目2-3")


def test_numbers_split_at_digit_boundaries(tokenizer):
    parsed = tokenizer.tokenize("八王子市本町5番地12号")
    assert parsed.name == "八王子市本町"
    assert parsed.numbers == ("5番地", "12号")


def test_whitespace_is_removed(tokenizer):
    parsed = tokenizer.tokenize(" 東京都　八王子市 本町 5 - 1 \n")
    assert parsed == ParsedAddress(name="東京都八王子市本町", numbers=("5-", "1"))


def test_multi_digit_chome(tokenizer):
    parsed = tokenizer.tokenize("本町12丁目3")
    assert parsed.name == "本町十二丁目"
    assert parsed.numbers == ("3",)


def test_chome_only_when_first_token(tokenizer):
    parsed = tokenizer.tokenize("本町5-2丁目")
    assert parsed.name == "本町"
    assert parsed.numbers == ("5-", "2丁目")


def test_no_numbers(tokenizer):
    assert tokenizer.tokenize("東京都八王子市") == ParsedAddress(name="東京都八王子市", numbers=())


def test_empty_line(tokenizer):
    assert tokenizer.tokenize("") == ParsedAddress(name="", numbers=())


def test_zero_chome_is_rejected(tokenizer):
    with pytest.raises(NumeralDomainError):
        tokenizer.tokenize("本町0丁目1")
