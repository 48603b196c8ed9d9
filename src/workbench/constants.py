from enum import StrEnum


class RoutePrefix(StrEnum):
    BRICKS = "bricks"
    CODECS = "codecs"
    PIPES = "pipes"


class LibraryEndpoint(StrEnum):
    ROOT = ""
    BRICK = "/{name}"


class CodecEndpoint(StrEnum):
    BASE64_VARIANTS = "/base64-variants"


class EvaluatorEndpoint(StrEnum):
    EVALUATE = "/evaluate"
