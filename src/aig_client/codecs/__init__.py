"""Wire codecs, one per protocol version."""

from ..models import ProtocolVersion
from .annotation import AnnotationCodec
from .base import WireCodec
from .json_ld import JsonLdCodec
from .properties import PropertiesCodec

CODECS: dict[ProtocolVersion, type[WireCodec]] = {
    ProtocolVersion.PROPERTIES: PropertiesCodec,
    ProtocolVersion.JSON_LD: JsonLdCodec,
    ProtocolVersion.ANNOTATION: AnnotationCodec,
}


def get_codec(version: ProtocolVersion | str) -> WireCodec:
    """Get a codec instance for a protocol version.

    Args:
        version: Protocol version or its string value

    Returns:
        A new codec instance

    Raises:
        ValueError: If the version is unknown
    """
    try:
        key = ProtocolVersion(version)
    except ValueError:
        raise ValueError(
            f"Unknown protocol version: {version}. "
            f"Must be one of: {[v.value for v in ProtocolVersion]}"
        ) from None
    return CODECS[key]()


__all__ = [
    "CODECS",
    "AnnotationCodec",
    "JsonLdCodec",
    "PropertiesCodec",
    "WireCodec",
    "get_codec",
]
