import re
from typing import List


SIZED_IMAGE_PATTERN = re.compile(r"^!\[\|\d+\]\(.+\)$")


def is_sized_image_line(line: str) -> bool:
    return bool(SIZED_IMAGE_PATTERN.match(line.strip()))


def process_image_galleries(markdown: str) -> str:
    """Join runs of consecutive sized-image lines into one gallery line."""
    result: List[str] = []
    pending: List[str] = []

    def flush():
        if pending:
            result.append(" ".join(pending))
            pending.clear()

    for line in markdown.split("\n"):
        if is_sized_image_line(line):
            pending.append(line.strip())
        else:
            flush()
            result.append(line)

    flush()
    return "\n".join(result)
