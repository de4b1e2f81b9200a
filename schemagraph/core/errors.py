class NormalizeError(ValueError):
    """Fatal normalizer-stage error; aborts the conversion before graph assembly."""


class UnrecognizedFormat(NormalizeError):
    pass


class ParseFailure(NormalizeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to parse schema file: {detail}")


class DialectNotImplemented(NormalizeError):
    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(f"{dialect} format parser not yet implemented")


class UnsupportedDialect(NormalizeError):
    def __init__(self, dialect: str, supported):
        self.dialect = dialect
        super().__init__(
            f"Unsupported input format: {dialect}. Supported formats are: {', '.join(supported)}"
        )
