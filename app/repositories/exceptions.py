class RepositoryError(Exception):
    """Raised when the store fails to execute a repository operation."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message

    def __str__(self) -> str:
        return self.message
