"""Domain exceptions."""


class AttachmentError(Exception):
    """An upload could not be turned into an attachment."""

    def __init__(self, name: str, message: str = "") -> None:
        """Initialize.

        Args:
            name: Name of the offending upload.
            message: Optional error message.
        """
        self.name = name
        super().__init__(message or f"Invalid attachment: {name}")
