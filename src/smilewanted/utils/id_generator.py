"""
ID generation utilities for outbound requests.

Every envelope sent to the endpoint carries a fresh request id so that
responses can be correlated in logs.
"""

import uuid


def generate_request_id() -> str:
    """
    Generate a random request ID for an outbound envelope.

    Returns:
        A UUID4 string
        Example: "b0d257b7-4a4e-4bf4-af33-6ac6e17f618a"
    """
    return str(uuid.uuid4())
