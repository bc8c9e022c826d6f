class ConversionError(Exception):
    """A single file could not be converted; the run carries on"""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ImageDecodeError(ConversionError):
    pass


class ImageEncodeError(ConversionError):
    pass


class FramePipelineError(ConversionError):
    pass
