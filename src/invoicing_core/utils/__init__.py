"""Cross-cutting helpers (logging setup)."""
