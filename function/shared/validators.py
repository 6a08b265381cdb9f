"""Validation functions for webhook inputs."""

# Define maximum request size (10MB)
MAX_REQUEST_SIZE = 10 * 1024 * 1024  # 10MB in bytes


def validate_request_size(content_length):
    """
    Validate the Content-Length header of an incoming request.

    Args:
        content_length: Header value (string) or None if absent

    Returns:
        tuple: (is_valid, error_message, status_code)
    """
    if not content_length:
        return True, None, None

    try:
        size = int(content_length)
    except ValueError:
        return False, "Invalid Content-Length header", 400

    if size > MAX_REQUEST_SIZE:
        return False, f"Request too large. Maximum size is {MAX_REQUEST_SIZE / (1024*1024):.0f}MB", 413

    return True, None, None
