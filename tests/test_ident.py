import pytest

from valence.ident import Ident, IdentError
from valence.protocol import ProtocolError, Reader, encode_string


@pytest.mark.parametrize(
    "text",
    ["minecraft:whatever", "_what-ever55_:.whatever/whatever123456789_"],
)
def test_parse_valid(text):
    assert str(Ident(text)) == text


@pytest.mark.parametrize("text", ["", ":", "foo:bar:baz"])
def test_parse_invalid(text):
    with pytest.raises(IdentError):
        Ident(text)


@pytest.mark.parametrize("text", ["Apple", "foo:", ":bar", "a b", "caf\u00e9", "ns/x:y"])
def test_parse_more_invalid(text):
    with pytest.raises(IdentError) as info:
        Ident(text)
    assert info.value.source == text


def test_error_message_names_source():
    with pytest.raises(IdentError, match='invalid identifier "foo:bar:baz"'):
        Ident("foo:bar:baz")


def test_equality():
    assert Ident("minecraft:my.identifier") == Ident("my.identifier")


def test_equal_identifiers_hash_equal():
    assert hash(Ident("minecraft:apple")) == hash(Ident("apple"))
    assert len({Ident("minecraft:apple"), Ident("apple")}) == 1


def test_different_namespace_not_equal():
    assert Ident("valence:apple") != Ident("apple")


def test_namespace_and_path():
    apple = Ident("my_namespace:apple")
    assert apple.namespace() == "my_namespace"
    assert apple.path() == "apple"


def test_no_namespace():
    ident = Ident("worldgen/biome")
    assert ident.namespace() is None
    assert ident.path() == "worldgen/biome"


def test_str_keeps_original_text():
    assert str(Ident("plains")) == "plains"


def test_encode_matches_string_encoding():
    assert Ident("minecraft:stone").encode() == encode_string("minecraft:stone")


def test_encode_decode_round_trip():
    original = Ident("valence:dimension_type_0")
    decoded = Ident.decode(Reader(original.encode()))
    assert decoded == original
    assert str(decoded) == str(original)


def test_decode_invalid_identifier():
    with pytest.raises(IdentError):
        Ident.decode(Reader(encode_string("Not Valid")))


def test_decode_truncated():
    with pytest.raises(ProtocolError):
        Ident.decode(Reader(encode_string("apple")[:-1]))


def test_non_string_rejected():
    with pytest.raises(TypeError):
        Ident(5)