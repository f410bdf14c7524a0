class MalformedSnapshot(ValueError):
    """
    Raised when a serialized model snapshot cannot be turned back into a state:
    missing or unexpected fields, non numeric values, or values breaking the
    non-negativity rules of the model.
    """
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
