class Skin2HeadError(Exception):
    """Base class for every error raised by skin2head."""


class ConfigError(Skin2HeadError):
    pass


class KeyLoadError(Skin2HeadError):
    """The session public key is missing, unreadable or not an RSA key."""


class RequestError(Skin2HeadError):
    """Transport level failure talking to the session/profile API."""


# --- Profile / texture property errors ---

class ProfileError(Skin2HeadError):
    pass


class ProfileNotFound(ProfileError):
    pass


class MissingSignature(ProfileError):
    """The textures property carries no signature and can never be trusted."""


class InvalidSignature(ProfileError):
    """The signature did not verify against the session key."""


class MalformedSignature(InvalidSignature):
    """The signature string is not valid base64."""


class PayloadDecodeError(ProfileError):
    """The property value is not base64 encoded JSON of the expected shape."""


# --- Skin bitmap errors ---

class SkinError(Skin2HeadError, ValueError):
    pass


class SkinNotFound(SkinError):
    pass


class SkinDecodeError(SkinError):
    pass


class UnsupportedSkinDimensions(SkinError):
    def __init__(self, width: int, height: int):
        super().__init__(f"Unsupported skin dimensions: {width}x{height}. Must be 64x64 or 64x32.")
        self.width = width
        self.height = height
