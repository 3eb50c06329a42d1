"""Users service: JSON resource API over a document-style user store."""
