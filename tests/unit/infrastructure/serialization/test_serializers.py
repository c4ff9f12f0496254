import pytest

from assetcache.domain.exceptions import SerializationError
from assetcache.infrastructure.serialization.factory import get_serializer
from assetcache.infrastructure.serialization.json_serializer import JsonSerializer
from assetcache.infrastructure.serialization.yaml_serializer import YamlSerializer

DOCUMENT = {
    "version": "1.0",
    "entries": {
        "": {"data": b"", "version": ""},
        "1": {"data": bytes([0x20] * 7), "version": "1.1"},
        "sprites/hero.png": {"data": bytes(range(256)), "version": "2.0"},
        "\x85": {"data": b"nel", "version": "\x85"},
        "sep\u2028bom\ufeff \u00e9 \U0001f3a8": {"data": b"u", "version": "\u2028"},
    },
}


@pytest.fixture(params=[JsonSerializer, YamlSerializer])
def serializer(request):
    return request.param()


def test_document_survives_serialization(serializer):
    payload = serializer.serialize(DOCUMENT)
    assert isinstance(payload, bytes)
    assert serializer.deserialize(payload) == DOCUMENT


def test_garbage_raises_serialization_error(serializer):
    with pytest.raises(SerializationError):
        serializer.deserialize(b"\xff\xfe{not: [valid")


def test_json_encodes_bytes_as_base64():
    payload = JsonSerializer().serialize({"data": b"\x00\x01"})
    assert payload == b'{"data": {"__bytes__": "AAE="}}'


def test_json_id_equal_to_marker_is_not_mistaken_for_bytes():
    document = {"version": "1.0", "entries": {"__bytes__": {"data": b"x", "version": ""}}}
    serializer = JsonSerializer()
    assert serializer.deserialize(serializer.serialize(document)) == document


def test_json_rejects_invalid_base64():
    with pytest.raises(SerializationError):
        JsonSerializer().deserialize(b'{"data": {"__bytes__": "***"}}')


def test_json_rejects_unserializable_values():
    with pytest.raises(SerializationError):
        JsonSerializer().serialize({"data": object()})


def test_yaml_uses_binary_tag():
    payload = YamlSerializer().serialize({"data": b"\x00\x01"})
    assert b"!!binary" in payload


@pytest.mark.parametrize("name, expected", [
    ("json", JsonSerializer),
    ("JSON", JsonSerializer),
    ("yaml", YamlSerializer),
    ("yml", YamlSerializer),
])
def test_get_serializer(name, expected):
    assert isinstance(get_serializer(name), expected)


def test_get_serializer_unknown_name():
    with pytest.raises(ValueError, match="Unknown serializer"):
        get_serializer("xml")
