from bricks.encoder import Encoder
from bricks.models import BrickMeta, BrickType
from container_models import Content


class ReverseEncoder(Encoder):
    """Reverses the order of characters."""

    meta = BrickMeta(name="reverse", title="Reverse", category="Transform", type=BrickType.ENCODER)

    def perform_encode(self, content: Content) -> Content:
        return Content.from_code_points(content.get_code_points()[::-1])

    def perform_decode(self, content: Content) -> Content:
        return self.perform_encode(content)
