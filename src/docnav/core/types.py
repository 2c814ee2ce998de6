"""Core type definitions."""

from typing import NewType

# Identifier of a content unit referenced from the sidebar (e.g., "intro")
# Distinct from display labels to catch type mismatches
DocumentId = NewType("DocumentId", str)
