import asyncio
import hashlib

from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content

ALGORITHMS = {
    "md5": "MD5",
    "sha1": "SHA-1",
    "sha224": "SHA-224",
    "sha256": "SHA-256",
    "sha384": "SHA-384",
    "sha512": "SHA-512",
    "sha3_256": "SHA3-256",
    "blake2b": "BLAKE2b",
}


def _digest(algorithm: str, data: bytes) -> bytes:
    return hashlib.new(algorithm, data).digest()


class HashEncoder(Encoder):
    """Computes a message digest. Encode only.

    The digest is computed off the event loop, the transform suspends until it is ready.
    """

    meta = BrickMeta(name="hash", title="Hash function", category="Modern cryptography", type=BrickType.ENCODER)
    reversible = False

    def __init__(self) -> None:
        super().__init__()
        self.add_settings(
            {
                "name": "algorithm",
                "type": "enum",
                "value": "sha256",
                "elements": list(ALGORITHMS),
                "labels": list(ALGORITHMS.values()),
            },
        )

    async def perform_encode(self, content: Content) -> Content:
        digest = await asyncio.to_thread(_digest, self.get_setting_value("algorithm"), content.data)
        return Content.from_bytes(digest)
