class ValidationError(Exception):
    """Exception raised when an inbound action envelope is malformed."""

    def __init__(self, message: str):
        """
        Initialize the validation error.

        Args:
            message: The error message
        """
        self.message = message
        super().__init__(self.message)
