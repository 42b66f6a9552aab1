"""Auto-detect the flavour of an API definition document."""


def detect_format(data) -> str:
    """Detect the format of a parsed API definition document.

    Returns: 'swagger', 'openapi', or 'unknown'.
    """
    if isinstance(data, dict):
        if "swagger" in data:
            return "swagger"
        if "openapi" in data:
            return "openapi"
    return "unknown"
