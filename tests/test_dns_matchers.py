import pytest
from hypothesis import given
from hypothesis import strategies as st

from hnsres.core.errors import RecordDecodeError
from hnsres.dns.matchers import (
    decode_registry_entry,
    encode_registry_entry,
    is_compatible_value,
    is_valid_registry_entry,
    is_valid_skylink,
)
from hnsres.dns.records import RegistryEntry

SKYLINK_ALPHABET = (
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"
)
TOKEN_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789%"

VALID_SKYLINKS = [
    "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA",
    "GADTpoO0Mccp4CEsZf8hK9PrrNeREOPFwCqViuVIu60EgA",
    "_Aau8RozjVPusXc6l6DpXtepofnRZm3CGnkVQboRP3WF_g",
    "sia://AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA",
    "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA/index.html",
]

INVALID_SKYLINKS = [
    "",
    None,
    "a",
    "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlS",
    "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkAS!lSA",
    "sia:/AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA",
    "https://AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA",
]

VALID_REGISTRY_ENTRIES = [
    "skyns://ed25519%3Fmypublickey/mydatakey",
    "skyns://abc/def",
]

INVALID_REGISTRY_ENTRIES = [
    "",
    None,
    "abc://1234/efgh",
    "skyns://ed25519%3Fmypublickey-mydatakey",
    "skyns://ed25519%3Fmypublickey:mydatakey",
    "skyns://pk/dk/extra",
    "skyns://pk/",
    "skyns:///dk",
    "ed25519%3Fmypublickey/mydatakey",
    " skyns://pk/dk",
]


@pytest.mark.parametrize("value", VALID_SKYLINKS)
def test_is_valid_skylink_accepts_skylinks(value) -> None:
    assert is_valid_skylink(value) is True


@pytest.mark.parametrize("value", INVALID_SKYLINKS)
def test_is_valid_skylink_rejects_invalid_values(value) -> None:
    assert is_valid_skylink(value) is False


@pytest.mark.parametrize("value", VALID_REGISTRY_ENTRIES)
def test_is_valid_registry_entry_accepts_references(value) -> None:
    assert is_valid_registry_entry(value) is True


@pytest.mark.parametrize("value", INVALID_REGISTRY_ENTRIES)
def test_is_valid_registry_entry_rejects_invalid_values(value) -> None:
    assert is_valid_registry_entry(value) is False


@given(st.text(alphabet=SKYLINK_ALPHABET, min_size=46, max_size=46))
def test_any_46_character_link_is_a_skylink(link: str) -> None:
    assert is_valid_skylink(link)
    assert is_valid_skylink(f"sia://{link}")


@given(st.text(alphabet=SKYLINK_ALPHABET, max_size=45))
def test_links_shorter_than_46_characters_are_rejected(link: str) -> None:
    assert not is_valid_skylink(link)
    assert not is_valid_skylink(f"sia://{link}")


@given(
    st.text(alphabet=SKYLINK_ALPHABET, min_size=46, max_size=46),
    st.text(),
)
def test_skylink_match_tolerates_trailing_characters(link: str, tail: str) -> None:
    assert is_valid_skylink(link + tail)


@given(
    st.text(alphabet=TOKEN_ALPHABET, min_size=1),
    st.text(alphabet=TOKEN_ALPHABET, min_size=1),
)
def test_registry_reference_shape(public_key: str, data_key: str) -> None:
    assert is_valid_registry_entry(f"skyns://{public_key}/{data_key}")
    assert not is_valid_registry_entry(f"skyns://{public_key}:{data_key}")
    assert not is_valid_registry_entry(f"{public_key}/{data_key}")


def test_decode_registry_entry_percent_decodes_both_keys() -> None:
    entry = decode_registry_entry("skyns://ed25519%3Fkey/data1")

    assert entry == RegistryEntry(public_key="ed25519?key", data_key="data1")


def test_decode_registry_entry_rejects_other_shapes() -> None:
    with pytest.raises(RecordDecodeError):
        decode_registry_entry("skyns://ed25519%3Fkey:data1")


def test_decode_registry_entry_rejects_invalid_utf8() -> None:
    with pytest.raises(RecordDecodeError):
        decode_registry_entry("skyns://%FF/data1")


@pytest.mark.parametrize(
    "value", ["skyns://%zz/data1", "skyns://key/data%", "skyns://key%4/data1"]
)
def test_decode_registry_entry_rejects_malformed_escapes(value) -> None:
    assert is_valid_registry_entry(value)
    with pytest.raises(RecordDecodeError, match="Malformed percent-encoding"):
        decode_registry_entry(value)


@given(st.text(min_size=1), st.text(min_size=1))
def test_registry_entry_encoding_roundtrip(public_key: str, data_key: str) -> None:
    entry = RegistryEntry(public_key=public_key, data_key=data_key)
    reference = encode_registry_entry(entry)

    assert is_valid_registry_entry(reference)
    assert decode_registry_entry(reference) == entry


def test_is_compatible_value() -> None:
    assert is_compatible_value(VALID_SKYLINKS[0])
    assert is_compatible_value(VALID_REGISTRY_ENTRIES[0])
    assert not is_compatible_value("dummy-value-that's-not-a-skylink")
