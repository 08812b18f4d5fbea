"""Shared helpers: error taxonomy, storage context, request decorators and logging."""
