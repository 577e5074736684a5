class ClipperError(Exception):
    """Base class for failures that abort an archive run."""


class MissingOriginalPostError(ClipperError):
    def __init__(self, message: str = "Could not find the Original Post (post #1)."):
        super().__init__(message)


class UnsafePathError(ClipperError):
    def __init__(self, message: str = "Target directory must be within the current working directory"):
        super().__init__(message)


class InvalidFilenameError(UnsafePathError):
    def __init__(self, message: str = "Invalid filename generated"):
        super().__init__(message)


class UnsupportedSourceUrlError(ClipperError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not extract topic ID from URL: {url}")
