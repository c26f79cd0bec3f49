"""Static Trustap API catalog shipped with the SDK."""

from trustap.catalog.operations import OPERATION_ID_TO_PATH
from trustap.catalog.security import SECURITY_MAP

__all__ = ["OPERATION_ID_TO_PATH", "SECURITY_MAP"]
