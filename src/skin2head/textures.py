import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .errors import PayloadDecodeError, ProfileError

logger = logging.getLogger(__name__)

TEXTURES_PROPERTY = "textures"


class TextureSlot(Enum):
    SKIN = "SKIN"
    CAPE = "CAPE"
    ELYTRA = "ELYTRA"


@dataclass(frozen=True)
class SignedProperty:
    """
    A server issued key/value pair. signature is base64 SHA1withRSA over value.
    """
    name: str
    value: str
    signature: Optional[str] = None

    @property
    def has_signature(self) -> bool:
        return self.signature is not None

    @classmethod
    def from_json(cls, data: Mapping) -> "SignedProperty":
        if not isinstance(data, dict):
            raise ProfileError(f"Profile property is not an object: {data!r}")
        name, value, signature = data.get("name"), data.get("value"), data.get("signature")
        if not isinstance(name, str) or not isinstance(value, str):
            raise ProfileError("Profile property needs a string name and value")
        if signature is not None and not isinstance(signature, str):
            raise ProfileError(f"Signature of property {name} is not a string")
        return cls(name, value, signature)


@dataclass(frozen=True)
class TextureDescriptor:
    url: str
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.url:
            raise ValueError("Texture url must not be empty")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def hash(self) -> str:
        """
        Content id the server embeds in the url: the last path segment,
        cut at its first '.'.
        e.g. http://textures.minecraft.net/texture/abc123 -> abc123
        """
        url = self.url[:-1] if self.url.endswith("/") else self.url
        segment = url[url.rfind("/") + 1:]
        dot = segment.find(".")
        return segment if dot == -1 else segment[:dot]

    def metadata_value(self, name: str) -> Optional[str]:
        return self.metadata.get(name)

    @property
    def is_slim(self) -> bool:
        return self.metadata.get("model") == "slim"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TextureDescriptor):
            return NotImplemented
        return self.url == other.url and dict(self.metadata) == dict(other.metadata)

    def __hash__(self) -> int:
        return hash((self.url, tuple(sorted(self.metadata.items()))))


@dataclass(frozen=True)
class TexturesPayload:
    timestamp: Optional[int]
    profile_id: Optional[str]
    profile_name: Optional[str]
    is_public: Optional[bool]
    textures: Dict[TextureSlot, TextureDescriptor]


def _parse_descriptor(slot: str, data) -> TextureDescriptor:
    if not isinstance(data, dict):
        raise PayloadDecodeError(f"Texture entry {slot} is not an object")

    url = data.get("url")
    if not isinstance(url, str) or not url:
        raise PayloadDecodeError(f"Texture entry {slot} has no url")

    metadata = data.get("metadata")
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise PayloadDecodeError(f"Texture entry {slot} has invalid metadata")

    values = {}
    for key, item in metadata.items():
        if item is None:
            continue
        if not isinstance(item, str):
            raise PayloadDecodeError(f"Texture entry {slot} metadata {key} is not a string")
        values[key] = item

    return TextureDescriptor(url, values)


def decode_payload(value: str) -> TexturesPayload:
    """
    Decodes a textures property value:
    base64 -> UTF-8 JSON -> {timestamp, profileId, profileName, isPublic, textures}.
    Unknown texture slots are skipped; a payload without textures yields an empty map.
    """
    try:
        raw = base64.b64decode(value.encode("utf-8"), validate=True)
    except (binascii.Error, ValueError, AttributeError) as e:
        raise PayloadDecodeError(f"Textures value is not valid base64: {e}")

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise PayloadDecodeError(f"Textures value is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise PayloadDecodeError("Textures payload is not a JSON object")

    raw_textures = data.get("textures")
    if raw_textures is None:
        raw_textures = {}
    if not isinstance(raw_textures, dict):
        raise PayloadDecodeError("Textures payload 'textures' is not an object")

    textures = {}
    for key, entry in raw_textures.items():
        try:
            slot = TextureSlot(key)
        except ValueError:
            logger.debug("Ignoring unknown texture slot %r", key)
            continue
        textures[slot] = _parse_descriptor(key, entry)

    # Older payloads carry signatureRequired instead of isPublic
    is_public = data.get("isPublic")
    if is_public is None and "signatureRequired" in data:
        is_public = not data["signatureRequired"]

    return TexturesPayload(
        timestamp=data.get("timestamp"),
        profile_id=data.get("profileId"),
        profile_name=data.get("profileName"),
        is_public=is_public,
        textures=textures,
    )


def decode(value: str) -> Dict[TextureSlot, TextureDescriptor]:
    return decode_payload(value).textures


def encode(textures: Mapping[TextureSlot, TextureDescriptor], timestamp: int = 0,
           profile_id: Optional[str] = None, profile_name: Optional[str] = None,
           is_public: bool = True) -> str:
    """Builds a textures property value, the inverse of decode_payload."""
    body = {}
    for slot, descriptor in textures.items():
        entry = {"url": descriptor.url}
        if descriptor.metadata:
            entry["metadata"] = dict(descriptor.metadata)
        body[slot.value] = entry

    data = {
        "timestamp": timestamp,
        "profileId": profile_id,
        "profileName": profile_name,
        "isPublic": is_public,
        "textures": body,
    }
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
