import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from .errors import InvalidSignature, MissingSignature, ProfileError, SkinNotFound
from .signature import SignatureValidator, session_validator
from .textures import TEXTURES_PROPERTY, SignedProperty, TextureDescriptor, TextureSlot, decode

logger = logging.getLogger(__name__)


def _normalize_id(profile_id: Optional[str]) -> Optional[str]:
    # The API uses dashless UUIDs; accept both forms
    if not profile_id:
        return None
    return profile_id.replace("-", "").lower()


@dataclass
class GameProfile:
    id: Optional[str]
    name: Optional[str]
    properties: List[SignedProperty] = field(default_factory=list)
    legacy: bool = False

    def __post_init__(self):
        self.id = _normalize_id(self.id)

    @classmethod
    def from_json(cls, data: Mapping) -> "GameProfile":
        """
        Builds a profile from session server JSON:
        {"id": ..., "name": ..., "properties": [{"name", "value", "signature"?}], "legacy"?}
        """
        raw_properties = data.get("properties") or []
        if not isinstance(raw_properties, list):
            raise ProfileError("Profile properties is not a list")
        properties = [SignedProperty.from_json(p) for p in raw_properties]
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            properties=properties,
            legacy=bool(data.get("legacy", False)),
        )

    @property
    def dashed_id(self) -> Optional[str]:
        if not self.id or len(self.id) != 32:
            return self.id
        i = self.id
        return f"{i[:8]}-{i[8:12]}-{i[12:16]}-{i[16:20]}-{i[20:]}"

    def get_property(self, name: str) -> Optional[SignedProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


def resolve_textures(source: Union[GameProfile, SignedProperty],
                     validator: Optional[SignatureValidator] = None,
                     require_secure: bool = True) -> Dict[TextureSlot, TextureDescriptor]:
    """
    The trust boundary: verifies the textures property and decodes it.

    A profile without a textures property has no textures (empty map).
    Unsigned properties raise MissingSignature, failed checks InvalidSignature
    (MalformedSignature when the signature is not base64).
    With require_secure=False the signature is not checked at all.
    """
    if isinstance(source, GameProfile):
        prop = source.get_property(TEXTURES_PROPERTY)
        owner = source.name or source.id
    else:
        prop = source
        owner = None

    if prop is None:
        return {}

    if require_secure:
        if not prop.has_signature:
            raise MissingSignature(f"Textures property of {owner or 'profile'} is not signed")
        if validator is None:
            validator = session_validator()
        if not validator.verify(prop.value, prop.signature):
            logger.warning("Rejected textures property of %s: bad signature", owner or "profile")
            raise InvalidSignature(f"Textures property of {owner or 'profile'} failed signature check")
    else:
        logger.warning("Resolving textures of %s without signature check", owner or "profile")

    return decode(prop.value)


def skin_texture(textures: Mapping[TextureSlot, TextureDescriptor]) -> TextureDescriptor:
    skin = textures.get(TextureSlot.SKIN)
    if skin is None:
        raise SkinNotFound("Profile has no skin texture")
    return skin
