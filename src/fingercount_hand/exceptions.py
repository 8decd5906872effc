"""
Exceptions raised by the hand gesture collaborators.

Classification itself never raises for a well-formed 21-landmark hand.
"""


class HandGestureError(Exception):
    """Base exception for this package."""
    pass


class CameraError(HandGestureError):
    """Raised when the capture device cannot be opened."""
    pass


class ModelLoadError(HandGestureError):
    """Raised when the MediaPipe backend or its model asset cannot be initialized."""
    pass
