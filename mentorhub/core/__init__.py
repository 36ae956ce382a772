"""Cross-cutting pieces shared by every layer: identity, errors, logging."""
