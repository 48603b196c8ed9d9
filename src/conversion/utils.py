def chunk(string: str, size: int) -> list[str]:
    """
    Split a string into consecutive pieces of ``size`` characters.

    The last piece may be shorter. An empty string yields no pieces.

    :param string: String to split.
    :param size: Piece length, must be positive.
    :return: List of pieces in order.
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [string[index : index + size] for index in range(0, len(string), size)]
