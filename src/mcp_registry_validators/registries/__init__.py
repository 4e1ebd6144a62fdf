"""
Registry-specific ownership validators.

Only OCI images are validated here; the OCI validator talks to the image's
registry over the Distribution API and checks the ownership label.
"""
from .oci import validate_ownership, verify_ownership
from .oci_errors import *  # noqa: F401,F403
from .oci_errors import __all__ as _error_names

__all__ = ["validate_ownership", "verify_ownership", *_error_names]
