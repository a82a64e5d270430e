class StructSwapError(RuntimeError):
    pass


class UnsupportedBitFieldError(StructSwapError):
    def __init__(self, source):
        super().__init__(f"Unsupported bit-field: {source}")
        self.source = source


class ConfigError(StructSwapError):
    pass
