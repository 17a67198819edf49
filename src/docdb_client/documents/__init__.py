"""Document CRUD package."""

from .models import Capability, Document, DocumentCategory, DocumentDescriptor, Transform

__all__ = [
    "Capability",
    "Document",
    "DocumentCategory",
    "DocumentDescriptor",
    "Transform",
]
